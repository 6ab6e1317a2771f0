from typing import Dict, List, Optional

from azure.core.exceptions import AzureError, HttpResponseError


class QuickstartConstants:
    Banner = 'Azure Blob storage quick start sample'
    CreatingContainer = 'Creating container: {container_name}'
    CreatingSampleFile = 'Creating a sample file at: {file_path}'
    UploadingSampleFile = 'Uploading the sample file '
    BlobUri = 'URI of blob is: {url}'
    ServiceError = 'Error returned from the service. Http code: {status_code} and error code: {error_code}'
    Completed = 'The program has completed successfully.'
    PressEnter = "Press the 'Enter' key while in the console to delete the sample files, example container, and exit the application."
    DeletingContainer = 'Deleting the container'
    CleanupServiceError = 'Service error. Http code: {status_code} and error code: {error_code}'
    DeletingFiles = 'Deleting the source, and downloaded files'


class PublicAccessType:
    Container = 'container'


class BlobListing:
    def __init__(
        self,
        name: str,
        url: str,
        size: Optional[int] = None
    ):
        self.name = name
        self.url = url
        self.size = size

    def to_dict(
        self
    ) -> Dict:
        return {
            'name': self.name,
            'url': self.url,
            'size': self.size
        }

    def __eq__(self, other):
        if not isinstance(other, BlobListing):
            return NotImplemented

        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f'BlobListing(name={self.name!r}, url={self.url!r}, size={self.size!r})'


class QuickstartResult:
    def __init__(
        self,
        container_name: str
    ):
        self.container_name = container_name
        self.source_path: Optional[str] = None
        self.download_path: Optional[str] = None
        self.blob_url: Optional[str] = None
        self.blobs: List[BlobListing] = []
        self.container_created = False
        self.container_deleted = False
        self.error: Optional[str] = None

    @property
    def succeeded(
        self
    ) -> bool:
        return self.error is None

    def to_dict(
        self
    ) -> Dict:
        return {
            'container_name': self.container_name,
            'source_path': self.source_path,
            'download_path': self.download_path,
            'blob_url': self.blob_url,
            'blobs': [blob.to_dict() for blob in self.blobs],
            'container_created': self.container_created,
            'container_deleted': self.container_deleted,
            'error': self.error,
            'succeeded': self.succeeded
        }


def get_service_error_message(
    template: str,
    error: HttpResponseError
) -> str:
    # error_code is populated by the storage SDK, not by azure-core itself
    return template.format(
        status_code=error.status_code,
        error_code=getattr(error, 'error_code', None))


def get_cleanup_error_message(
    error: AzureError
) -> str:
    # Transport failures carry no status or error code
    if isinstance(error, HttpResponseError):
        return get_service_error_message(
            QuickstartConstants.CleanupServiceError, error)

    return str(error)
