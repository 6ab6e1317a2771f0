import logging
import os
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_LEVEL_VARIABLE = 'QUICKSTART_LOG_LEVEL'
LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def configure_logging(
    level: Optional[Union[str, int]] = None
) -> logging.Logger:
    '''
    Install a single stream handler on the root logger.  Defaults to
    WARNING so the console shows the sample's own output unless
    QUICKSTART_LOG_LEVEL asks for more.
    '''

    level = level or os.environ.get(LOG_LEVEL_VARIABLE) or logging.WARNING
    if isinstance(level, str):
        level = level.upper()
        if level not in LOG_LEVELS:
            level = logging.WARNING

    root = logging.getLogger()
    root.setLevel(level)

    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    # The SDK's HTTP policy logs every request at INFO
    logging.getLogger('azure.core.pipeline.policies.http_logging_policy').setLevel(
        max(root.level, logging.WARNING))

    return root
