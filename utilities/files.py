import atexit
import os
import tempfile
from typing import Optional, Set

import aiofiles

from utilities.logger import get_logger

logger = get_logger(__name__)

_pending_deletes: Set[str] = set()


def _new_temp_path(
    prefix: str,
    suffix: str,
    directory: Optional[str] = None
) -> str:
    handle, path = tempfile.mkstemp(
        prefix=prefix,
        suffix=suffix,
        dir=directory)
    os.close(handle)

    return os.path.abspath(path)


def create_sample_file(
    prefix: str,
    suffix: str,
    content: str,
    directory: Optional[str] = None
) -> str:
    path = _new_temp_path(
        prefix=prefix,
        suffix=suffix,
        directory=directory)

    logger.info(f'Writing sample file: {path}')
    with open(path, 'w', encoding='utf-8') as file:
        file.write(content)

    return path


async def create_sample_file_async(
    prefix: str,
    suffix: str,
    content: str,
    directory: Optional[str] = None
) -> str:
    path = _new_temp_path(
        prefix=prefix,
        suffix=suffix,
        directory=directory)

    logger.info(f'Writing sample file: {path}')
    async with aiofiles.open(path, 'w', encoding='utf-8') as file:
        await file.write(content)

    return path


def get_download_path(
    source_path: str,
    file_name: str
) -> str:
    return os.path.join(
        os.path.dirname(os.path.abspath(source_path)),
        file_name)


def _remove_file(path: str) -> None:
    _pending_deletes.discard(path)

    if os.path.exists(path):
        logger.info(f'Removing local file: {path}')
        os.remove(path)


def delete_on_exit(path: str) -> bool:
    '''
    Remove the file when the interpreter exits.  Returns False if the
    path was already registered.
    '''

    path = os.path.abspath(path)
    if path in _pending_deletes:
        return False

    _pending_deletes.add(path)
    atexit.register(_remove_file, path)

    return True
