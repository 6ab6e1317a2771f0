import os
from unittest.mock import MagicMock, patch

import pytest
from azure.core.exceptions import ServiceRequestError

from domain.exceptions import ArgumentNullException
from domain.storage import BlobListing, QuickstartConstants
from services.quickstart_service import QuickstartService
from tests.helpers import TestHelper
from utilities import files

helper = TestHelper()


@pytest.fixture
def sample_directory(tmp_path):
    def create_sample_file(**kwargs):
        return files.create_sample_file(directory=str(tmp_path), **kwargs)

    with patch('services.quickstart_service.create_sample_file', side_effect=create_sample_file):
        yield tmp_path


@pytest.fixture
def delete_on_exit():
    with patch('services.quickstart_service.delete_on_exit') as mock:
        yield mock


def get_storage_client():
    storage_client = MagicMock()
    storage_client.create_container.return_value = True
    storage_client.delete_container.return_value = True
    storage_client.upload_blob.side_effect = lambda container_name, blob_name, file_path: helper.get_blob_url(
        container_name, blob_name)
    storage_client.list_blobs.side_effect = lambda container_name: [
        BlobListing('sampleFile1.txt', helper.get_blob_url(container_name, 'sampleFile1.txt'), 12)
    ]
    return storage_client


def make_service(storage_client, **kwargs):
    output = []
    prompt = MagicMock(return_value='')

    service = QuickstartService(
        storage_client=storage_client,
        quickstart_config=helper.get_quickstart_config(**kwargs),
        prompt=prompt,
        output=output.append)

    return service, output, prompt


def test_run_calls_storage_operations_in_order(sample_directory, delete_on_exit):
    storage_client = get_storage_client()
    service, _, _ = make_service(storage_client)

    result = service.run()

    assert result.succeeded
    assert [call[0] for call in storage_client.method_calls] == [
        'create_container',
        'upload_blob',
        'list_blobs',
        'download_blob',
        'delete_container'
    ]


def test_run_uses_documented_arguments(sample_directory, delete_on_exit):
    storage_client = get_storage_client()
    service, _, _ = make_service(storage_client)

    result = service.run()

    blob_name = os.path.basename(result.source_path)
    download_path = str(sample_directory / 'downloadedFile.txt')

    storage_client.create_container.assert_called_once_with(
        container_name='quickstartcontainer',
        public_access='container')
    storage_client.upload_blob.assert_called_once_with(
        container_name='quickstartcontainer',
        blob_name=blob_name,
        file_path=result.source_path)
    storage_client.list_blobs.assert_called_once_with(
        container_name='quickstartcontainer')
    storage_client.download_blob.assert_called_once_with(
        container_name='quickstartcontainer',
        blob_name=blob_name,
        file_path=download_path)
    storage_client.delete_container.assert_called_once_with(
        container_name='quickstartcontainer')

    assert blob_name.startswith('sampleFile')
    assert blob_name.endswith('.txt')
    assert result.download_path == download_path
    assert result.container_created
    assert result.container_deleted


def test_run_writes_sample_content(sample_directory, delete_on_exit):
    service, _, _ = make_service(get_storage_client())

    result = service.run()

    with open(result.source_path, 'r', encoding='utf-8') as file:
        assert file.read() == 'Hello Azure!'


def test_run_output(sample_directory, delete_on_exit):
    service, output, _ = make_service(get_storage_client())

    result = service.run()

    assert output == [
        QuickstartConstants.Banner,
        'Creating container: quickstartcontainer',
        f'Creating a sample file at: {result.source_path}',
        QuickstartConstants.UploadingSampleFile,
        f"URI of blob is: {helper.get_blob_url('quickstartcontainer', 'sampleFile1.txt')}",
        QuickstartConstants.Completed,
        QuickstartConstants.DeletingContainer,
        QuickstartConstants.DeletingFiles
    ]


def test_run_marks_local_files_for_deletion(sample_directory, delete_on_exit):
    service, _, _ = make_service(get_storage_client())

    result = service.run()

    assert [call.args[0] for call in delete_on_exit.call_args_list] == [
        result.download_path,
        result.source_path
    ]


def test_run_interactive_waits_before_cleanup(sample_directory, delete_on_exit):
    storage_client = get_storage_client()
    service, output, prompt = make_service(storage_client, interactive=True)

    def assert_not_deleted(message):
        storage_client.delete_container.assert_not_called()
        return ''

    prompt.side_effect = assert_not_deleted

    service.run()

    prompt.assert_called_once()
    assert QuickstartConstants.PressEnter in output
    storage_client.delete_container.assert_called_once()


def test_run_non_interactive_skips_prompt(sample_directory, delete_on_exit):
    service, output, prompt = make_service(get_storage_client())

    service.run()

    prompt.assert_not_called()
    assert QuickstartConstants.PressEnter not in output


def test_run_service_error_still_cleans_up(sample_directory, delete_on_exit):
    storage_client = get_storage_client()
    storage_client.upload_blob.side_effect = helper.get_service_error(
        status_code=403,
        error_code='AuthorizationFailure')
    service, output, _ = make_service(storage_client)

    result = service.run()

    assert not result.succeeded
    assert result.error == 'Error returned from the service. Http code: 403 and error code: AuthorizationFailure'
    assert result.error in output

    storage_client.list_blobs.assert_not_called()
    storage_client.download_blob.assert_not_called()
    storage_client.delete_container.assert_called_once()

    delete_on_exit.assert_called_once_with(result.source_path)
    assert result.download_path is None


def test_run_generic_error_prints_message(sample_directory, delete_on_exit):
    storage_client = get_storage_client()
    storage_client.create_container.side_effect = ValueError('Unexpected failure')
    service, output, _ = make_service(storage_client)

    result = service.run()

    assert result.error == 'Unexpected failure'
    assert 'Unexpected failure' in output
    assert result.source_path is None
    storage_client.upload_blob.assert_not_called()
    storage_client.delete_container.assert_called_once()
    delete_on_exit.assert_not_called()


def test_run_cleanup_service_error(sample_directory, delete_on_exit):
    storage_client = get_storage_client()
    storage_client.delete_container.side_effect = helper.get_service_error(
        status_code=409,
        error_code='ContainerBeingDeleted')
    service, output, _ = make_service(storage_client)

    result = service.run()

    assert result.succeeded
    assert not result.container_deleted
    assert 'Service error. Http code: 409 and error code: ContainerBeingDeleted' in output
    assert output[-1] == QuickstartConstants.DeletingFiles
    assert delete_on_exit.call_count == 2


def test_run_download_error_cleans_up_download_path(sample_directory, delete_on_exit):
    storage_client = get_storage_client()
    storage_client.download_blob.side_effect = helper.get_service_error(
        status_code=404,
        error_code='BlobNotFound')
    service, _, _ = make_service(storage_client)

    result = service.run()

    assert result.error == 'Error returned from the service. Http code: 404 and error code: BlobNotFound'
    assert delete_on_exit.call_count == 2


def test_service_requires_storage_client():
    with pytest.raises(ArgumentNullException):
        QuickstartService(
            storage_client=None,
            quickstart_config=helper.get_quickstart_config())


def test_run_cleanup_transport_error(sample_directory, delete_on_exit):
    storage_client = get_storage_client()
    storage_client.delete_container.side_effect = ServiceRequestError(
        'Connection reset by peer')
    service, output, _ = make_service(storage_client)

    result = service.run()

    assert result.succeeded
    assert not result.container_deleted
    assert 'Connection reset by peer' in output
    assert output[-1] == QuickstartConstants.DeletingFiles
    assert [call.args[0] for call in delete_on_exit.call_args_list] == [
        result.download_path,
        result.source_path
    ]


def test_run_cleanup_unexpected_error_still_marks_files(sample_directory, delete_on_exit):
    storage_client = get_storage_client()
    storage_client.delete_container.side_effect = RuntimeError('Unexpected')
    service, _, _ = make_service(storage_client)

    with pytest.raises(RuntimeError):
        service.run()

    assert delete_on_exit.call_count == 2
