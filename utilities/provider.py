from typing import Callable, Union

from clients.storage_client import StorageClient
from clients.storage_client_async import StorageClientAsync
from models.storage_config import QuickstartConfig, StorageConfig
from services.quickstart_service import QuickstartService
from services.quickstart_service_async import QuickstartServiceAsync


class ContainerProvider:
    @staticmethod
    def get_quickstart_service(
        storage_config: StorageConfig,
        quickstart_config: QuickstartConfig,
        prompt: Callable[[str], str] = input
    ) -> QuickstartService:
        return QuickstartService(
            storage_client=StorageClient(
                storage_config=storage_config),
            quickstart_config=quickstart_config,
            prompt=prompt)

    @staticmethod
    def get_quickstart_service_async(
        storage_config: StorageConfig,
        quickstart_config: QuickstartConfig,
        prompt: Callable[[str], str] = input
    ) -> QuickstartServiceAsync:
        return QuickstartServiceAsync(
            storage_client=StorageClientAsync(
                storage_config=storage_config),
            quickstart_config=quickstart_config,
            prompt=prompt)

    @classmethod
    def get_service(
        cls,
        storage_config: StorageConfig,
        quickstart_config: QuickstartConfig,
        use_async: bool = False
    ) -> Union[QuickstartService, QuickstartServiceAsync]:
        if use_async:
            return cls.get_quickstart_service_async(
                storage_config=storage_config,
                quickstart_config=quickstart_config)

        return cls.get_quickstart_service(
            storage_config=storage_config,
            quickstart_config=quickstart_config)
