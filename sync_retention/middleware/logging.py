import os
import sys
import threading

import psutil
from aws_lambda_powertools.logging import Logger
from aws_lambda_powertools.middleware_factory import lambda_handler_decorator

logger = Logger(service="sync-retention")


@lambda_handler_decorator
def logging_middleware(handler, event, context):
    """Middleware to automatically handle structured logging."""
    logger.append_keys(command=event.get("command"))

    vm_start = psutil.virtual_memory()
    system_info_start = {
        "cpu_cores": os.cpu_count(),
        "pid": os.getpid(),
        "argv": sys.argv[1:],
        "process_rss_mb": psutil.Process().memory_info().rss // (1024 * 1024),
        "memory_available_mb": vm_start.available // (1024 * 1024),
        "memory_percent_used": vm_start.percent,
        "active_threads": threading.active_count(),
    }
    logger.info("System details at start", extra={"system_info": system_info_start})
    logger.info("Received command", extra={"event": event})

    try:
        response = handler(event, context)
        logger.info("Command executed successfully", extra={"response": response})

        vm_end = psutil.virtual_memory()
        system_info_end = {
            "memory_available_mb": vm_end.available // (1024 * 1024),
            "memory_percent_used": vm_end.percent,
            "active_threads": threading.active_count(),
        }
        logger.info("System details at end", extra={"system_info": system_info_end})

        return response
    except Exception:
        logger.exception("Error processing command")
        # Re-raise the exception to be handled by the error handler middleware
        raise
