import os
from typing import Callable

from azure.core.exceptions import AzureError, HttpResponseError

from clients.storage_client import StorageClient
from domain.exceptions import ArgumentNullException
from domain.storage import (QuickstartConstants, QuickstartResult,
                            get_cleanup_error_message,
                            get_service_error_message)
from models.storage_config import QuickstartConfig
from utilities.files import create_sample_file, delete_on_exit, get_download_path
from utilities.logger import get_logger

logger = get_logger(__name__)


class QuickstartService:
    '''
    Creates a container, uploads a sample file to it, lists the
    container, downloads the blob and then removes everything it
    created.
    '''

    def __init__(
        self,
        storage_client: StorageClient,
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

    def run(
        self
    ) -> QuickstartResult:
        result = QuickstartResult(
            container_name=self._config.container_name)

        self._output(QuickstartConstants.Banner)

        try:
            self.__create_container(result)
            self.__create_sample_file(result)
            self.__upload_sample_file(result)
            self.__list_blobs(result)
            self.__download_blob(result)

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
            self.__cleanup(result)

        return result

    def __create_container(
        self,
        result: QuickstartResult
    ) -> None:
        self._output(QuickstartConstants.CreatingContainer.format(
            container_name=self._config.container_name))

        result.container_created = self._storage_client.create_container(
            container_name=self._config.container_name,
            public_access=self._config.public_access)

    def __create_sample_file(
        self,
        result: QuickstartResult
    ) -> None:
        result.source_path = create_sample_file(
            prefix=self._config.file_prefix,
            suffix=self._config.file_suffix,
            content=self._config.content)

        self._output(QuickstartConstants.CreatingSampleFile.format(
            file_path=result.source_path))

    def __upload_sample_file(
        self,
        result: QuickstartResult
    ) -> None:
        self._output(QuickstartConstants.UploadingSampleFile)

        result.blob_url = self._storage_client.upload_blob(
            container_name=self._config.container_name,
            blob_name=os.path.basename(result.source_path),
            file_path=result.source_path)

    def __list_blobs(
        self,
        result: QuickstartResult
    ) -> None:
        result.blobs = self._storage_client.list_blobs(
            container_name=self._config.container_name)

        for blob in result.blobs:
            self._output(QuickstartConstants.BlobUri.format(
                url=blob.url))

    def __download_blob(
        self,
        result: QuickstartResult
    ) -> None:
        download_path = get_download_path(
            source_path=result.source_path,
            file_name=self._config.downloaded_file_name)

        # Set before the call so a partial download is still cleaned up
        result.download_path = download_path

        self._storage_client.download_blob(
            container_name=self._config.container_name,
            blob_name=os.path.basename(result.source_path),
            file_path=download_path)

    def __cleanup(
        self,
        result: QuickstartResult
    ) -> None:
        self._output(QuickstartConstants.Completed)

        if self._config.interactive:
            self._output(QuickstartConstants.PressEnter)
            self._prompt('')

        self._output(QuickstartConstants.DeletingContainer)
        try:
            result.container_deleted = self._storage_client.delete_container(
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
