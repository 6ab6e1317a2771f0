import asyncio
import os
from typing import Callable

from azure.core.exceptions import AzureError, HttpResponseError

from clients.storage_client_async import StorageClientAsync
from domain.exceptions import ArgumentNullException
from domain.storage import (QuickstartConstants, QuickstartResult,
                            get_cleanup_error_message,
                            get_service_error_message)
from models.storage_config import QuickstartConfig
from utilities.files import (create_sample_file_async, delete_on_exit,
                             get_download_path)
from utilities.logger import get_logger

logger = get_logger(__name__)


class QuickstartServiceAsync:
    def __init__(
        self,
        storage_client: StorageClientAsync,
        quickstart_config: QuickstartConfig,
        prompt: Callable[[str], str] = input,
        output: Callable[[str], None] = print
    ):
        ArgumentNullException.if_none(storage_client, 'storage_client')
        ArgumentNullException.if_none(quickstart_config, 'quickstart_config')

        self._storage_client = storage_client
        self._config = quickstart_config
        self._prompt = prompt
        self._output = output

    async def run(
        self
    ) -> QuickstartResult:
        result = QuickstartResult(
            container_name=self._config.container_name)

        self._output(QuickstartConstants.Banner)

        try:
            container_name = self._config.container_name

            self._output(QuickstartConstants.CreatingContainer.format(
                container_name=container_name))
            result.container_created = await self._storage_client.create_container(
                container_name=container_name,
                public_access=self._config.public_access)

            result.source_path = await create_sample_file_async(
                prefix=self._config.file_prefix,
                suffix=self._config.file_suffix,
                content=self._config.content)
            self._output(QuickstartConstants.CreatingSampleFile.format(
                file_path=result.source_path))

            blob_name = os.path.basename(result.source_path)

            self._output(QuickstartConstants.UploadingSampleFile)
            result.blob_url = await self._storage_client.upload_blob(
                container_name=container_name,
                blob_name=blob_name,
                file_path=result.source_path)

            result.blobs = await self._storage_client.list_blobs(
                container_name=container_name)
            for blob in result.blobs:
                self._output(QuickstartConstants.BlobUri.format(
                    url=blob.url))

            result.download_path = get_download_path(
                source_path=result.source_path,
                file_name=self._config.downloaded_file_name)
            await self._storage_client.download_blob(
                container_name=container_name,
                blob_name=blob_name,
                file_path=result.download_path)

        except HttpResponseError as ex:
            result.error = get_service_error_message(
                QuickstartConstants.ServiceError, ex)
            logger.error(result.error)
            self._output(result.error)

        except Exception as ex:
            logger.exception('Quickstart failed')
            result.error = str(ex)
            self._output(result.error)

        finally:
            await self.__cleanup(result)

        return result

    async def __wait_for_user(
        self
    ) -> None:
        self._output(QuickstartConstants.PressEnter)

        # input() blocks, keep it off the event loop
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._prompt, '')

    async def __cleanup(
        self,
        result: QuickstartResult
    ) -> None:
        self._output(QuickstartConstants.Completed)

        if self._config.interactive:
            await self.__wait_for_user()

        self._output(QuickstartConstants.DeletingContainer)
        try:
            result.container_deleted = await self._storage_client.delete_container(
                container_name=self._config.container_name)
        except AzureError as ex:
            message = get_cleanup_error_message(ex)
            logger.error(message)
            self._output(message)
        finally:
            self._output(QuickstartConstants.DeletingFiles)

            if result.download_path is not None:
                delete_on_exit(result.download_path)

            if result.source_path is not None:
                delete_on_exit(result.source_path)
