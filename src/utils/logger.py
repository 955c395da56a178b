"""
Structured Logging System for the Invoice Engine service
Provides rotating file logs with immediate flush for real-time monitoring
"""
import logging
from pathlib import Path
from logging.handlers import RotatingFileHandler


class InvoiceLogger:
    """Centralized logging with rotation and formatting

    Handlers are attached to the ``invoice_engine`` logger, so messages
    from every engine module end up in the same files.
    """
    
    def __init__(self, name="invoice_engine", log_dir="logs", log_level="INFO", console=True):
        """
        Initialize logger with rotating file handlers
        
        Args:
            name: Logger name
            log_dir: Directory for log files
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            console: Also log to stderr
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, log_level))
        
        # Clear any existing handlers
        self.close()
        
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        self.log_dir = str(log_path)
        
        log_format = logging.Formatter(
            '[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        
        # 1. Main rotating file handler (10MB per file, keep 5 files)
        main_handler = RotatingFileHandler(
            log_path / 'invoice_engine.log',
            maxBytes=10*1024*1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        main_handler.setLevel(logging.DEBUG)
        main_handler.setFormatter(log_format)
        self.logger.addHandler(main_handler)
        
        # 2. Error-only log file (5MB per file, keep 3 files)
        error_handler = RotatingFileHandler(
            log_path / 'errors.log',
            maxBytes=5*1024*1024,  # 5MB
            backupCount=3,
            encoding='utf-8'
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(log_format)
        self.logger.addHandler(error_handler)
        
        # 3. Console handler
        if console:
            console_handler = logging.StreamHandler()
            console_handler.setLevel(logging.INFO)
            console_handler.setFormatter(log_format)
            self.logger.addHandler(console_handler)
    
    def debug(self, message, component=""):
        """Log debug message"""
        self._log(logging.DEBUG, message, component)
    
    def info(self, message, component=""):
        """Log info message"""
        self._log(logging.INFO, message, component)
    
    def warning(self, message, component=""):
        """Log warning message"""
        self._log(logging.WARNING, message, component)
    
    def error(self, message, component="", exc_info=False):
        """Log error message"""
        self._log(logging.ERROR, message, component, exc_info=exc_info)
    
    def _log(self, level, message, component="", exc_info=False):
        """Internal logging method with component prefix"""
        if component:
            message = f"[{component}] {message}"
        
        self.logger.log(level, message, exc_info=exc_info)
        
        # Force immediate flush
        for handler in self.logger.handlers:
            handler.flush()
    
    def log_request(self, method, path, status_code, duration_ms):
        """Log one API request"""
        self.info(
            f"{method} {path} -> {status_code} in {duration_ms:.1f}ms",
            component="API"
        )
    
    def log_rejection(self, error_code, message):
        """Log a recoverable error returned to a caller"""
        self.warning(f"{error_code}: {message}", component="API")
    
    def close(self):
        """Detach and close every handler"""
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)


# Global logger instance
_global_logger = None

def get_logger(log_level="INFO", log_dir="logs"):
    """Get or create global logger instance"""
    global _global_logger
    if _global_logger is None:
        _global_logger = InvoiceLogger(log_dir=log_dir, log_level=log_level)
    return _global_logger
