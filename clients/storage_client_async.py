from typing import List, Optional

import aiofiles
from azure.core.exceptions import ResourceExistsError, ResourceNotFoundError
from azure.storage.blob import BlobProperties
from azure.storage.blob.aio import BlobServiceClient, ContainerClient

from domain.exceptions import ArgumentNullException
from domain.storage import BlobListing, PublicAccessType
from models.storage_config import StorageConfig
from utilities.logger import get_logger

logger = get_logger(__name__)


class StorageClientAsync:
    def __init__(
        self,
        storage_config: StorageConfig
    ):
        ArgumentNullException.if_none(storage_config, 'storage_config')

        self.__connection_string = storage_config.get_connection_string()

    def __get_blob_service_client(self):
        return BlobServiceClient.from_connection_string(
            conn_str=self.__connection_string)

    async def create_container(
        self,
        container_name: str,
        public_access: Optional[str] = PublicAccessType.Container
    ) -> bool:
        logger.info(f'Creating container: {container_name}')

        async with self.__get_blob_service_client() as client:
            container_client: ContainerClient = client.get_container_client(
                container=container_name)

            try:
                await container_client.create_container(
                    public_access=public_access)
            except ResourceExistsError:
                logger.info(f'Container already exists: {container_name}')
                return False

            logger.info('Container created successfully')
            return True

    async def upload_blob(
        self,
        container_name: str,
        blob_name: str,
        file_path: str
    ) -> str:
        ArgumentNullException.if_none_or_whitespace(blob_name, 'blob_name')

        logger.info(f'Uploading blob: {container_name}: {blob_name}')

        async with aiofiles.open(file_path, 'rb') as file:
            blob_data = await file.read()

        async with self.__get_blob_service_client() as client:
            logger.info(
                f'Getting blob container client for container: {container_name}')
            container_client: ContainerClient = client.get_container_client(
                container=container_name)

            logger.info(f'Getting blob client for blob: {blob_name}')
            blob_client = container_client.get_blob_client(blob_name)

            logger.info('Uploading blob data to storage')
            await blob_client.upload_blob(blob_data, overwrite=True)
            logger.info('Blob uploaded successfully')

            return blob_client.url

    async def list_blobs(
        self,
        container_name: str
    ) -> List[BlobListing]:
        async with self.__get_blob_service_client() as client:
            logger.info(
                f'Getting blob container client for container: {container_name}')
            container_client: ContainerClient = client.get_container_client(
                container=container_name)

            results: List[BlobListing] = []
            blob: BlobProperties
            async for blob in container_client.list_blobs():
                blob_client = container_client.get_blob_client(blob.name)
                results.append(BlobListing(
                    name=blob.name,
                    url=blob_client.url,
                    size=blob.size))

            logger.info(f'Listed {len(results)} blobs in {container_name}')
            return results

    async def download_blob(
        self,
        container_name: str,
        blob_name: str,
        file_path: str
    ) -> int:
        logger.info(f'Downloading blob: {container_name}: {blob_name}')

        async with self.__get_blob_service_client() as client:
            logger.info(
                f'Getting blob container client for container: {container_name}')
            container_client: ContainerClient = client.get_container_client(
                container=container_name)

            logger.info(f'Getting blob client for blob: {blob_name}')
            blob_client = container_client.get_blob_client(blob_name)

            logger.info('Downloading blob data from storage')
            blob = await blob_client.download_blob()

            logger.info('Reading blob download stream')
            data = await blob.readall()

        logger.info(f'Writing blob data to file: {file_path}')
        async with aiofiles.open(file_path, 'wb') as file:
            await file.write(data)

        logger.info(f'Blob downloaded successfully: {len(data)} bytes')
        return len(data)

    async def delete_container(
        self,
        container_name: str
    ) -> bool:
        logger.info(f'Deleting container: {container_name}')

        async with self.__get_blob_service_client() as client:
            container_client: ContainerClient = client.get_container_client(
                container=container_name)

            try:
                await container_client.delete_container()
            except ResourceNotFoundError:
                logger.info(f'Container does not exist: {container_name}')
                return False

            logger.info('Container deleted successfully')
            return True
