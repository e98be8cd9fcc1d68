"""Logging utilities for kollupy modules."""

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a package logger that defers to the root logger configuration.
    
    Loggers propagate to the root logger, so ``logging.basicConfig()`` is
    enough to see their output. A WARNING default is applied only while the
    root logger has no handlers.
    
    Args:
        name: Logger name (e.g. 'kollupy.api')
        
    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True
    
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logger.setLevel(logging.WARNING)
    
    return logger
