import os
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# urllib3 logs full request URLs at DEBUG, explorer URLs carry the api key
REQUEST_LOGGERS = ("urllib3",)


def quiet_request_loggers(level: int):
    for name in REQUEST_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))


def setup_logging() -> logging.Logger:
    """Setup root logging, using Google Cloud logging when USE_GCLOUD_LOGGING=true"""
    level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
    use_gcloud = os.getenv("USE_GCLOUD_LOGGING", "false").lower() == "true"

    if use_gcloud:
        try:
            # Only import Google Cloud logging if actually using it
            import google.cloud.logging
            from google.cloud.logging_v2.handlers import CloudLoggingHandler

            client = google.cloud.logging.Client()
            logger = logging.getLogger()
            logger.setLevel(level)
            logger.handlers.clear()

            cloud_handler = CloudLoggingHandler(client)
            # JSON that gcloud can parse
            cloud_handler.setFormatter(logging.Formatter(
                '{"message": "%(message)s", "severity": "%(levelname)s", "timestamp": "%(asctime)s"}'
            ))
            logger.addHandler(cloud_handler)
            quiet_request_loggers(level)
            return logger
        except Exception as e:
            logging.basicConfig(level=level, format=LOG_FORMAT)
            quiet_request_loggers(level)
            logger = logging.getLogger()
            logger.warning(f"Failed to initialize Google Cloud logging: {e}. Using standard logging.")
            return logger

    logging.basicConfig(level=level, format=LOG_FORMAT)
    quiet_request_loggers(level)
    return logging.getLogger()
