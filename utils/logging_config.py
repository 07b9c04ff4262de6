import os
import logging
import psutil


def setup_logger(logger_name: str, log_file: str) -> logging.Logger:
    """
    Set up a logger with dynamic log directory creation.

    Args:
        logger_name: Name of the logger
        log_file: Name of the log file

    Returns:
        logging.Logger: Configured logger instance
    """
    logs_dir = os.path.join(os.path.dirname(os.path.dirname(__file__)), 'logs')
    os.makedirs(logs_dir, exist_ok=True)

    logger = logging.getLogger(logger_name)
    logger.setLevel(logging.INFO)

    # Add handlers once per logger name
    if not logger.handlers:
        file_handler = logging.FileHandler(os.path.join(logs_dir, log_file))
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(
            logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        )

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(logging.Formatter('%(levelname)s - %(message)s'))

        logger.addHandler(file_handler)
        logger.addHandler(console_handler)

    return logger


def log_network_io(logger, endpoint: str, method: str, response_status: int):
    """
    Logs network I/O counters when an endpoint is called.

    Args:
        logger: Logger instance
        endpoint: The endpoint that was called
        method: HTTP method of the request
        response_status: HTTP response status code
    """
    try:
        net_io = psutil.net_io_counters()
        logger.info(
            f"Network I/O - Method {method} | Status: {response_status} | Endpoint: {endpoint} | "
            f"Bytes Sent: {net_io.bytes_sent} | Bytes Recv: {net_io.bytes_recv}"
        )
    except Exception as e:
        logger.error(f"Error logging network I/O: {str(e)}")
