class DoesNotExist(Exception):  # noqa: N818
    """Exception raised when a resource does not exist."""

    def __init__(self, resource_type: str, resource_id: int | str):
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(f'{resource_type} with ID "{resource_id!s}" does not exist')


class StorageError(Exception):
    """Exception raised when the state backend cannot read or write a value."""

    def __init__(self, scope: str, field: str, error: Exception | str):
        self.scope = scope
        self.field = field
        self.error = error
        super().__init__(f'Storage failure for "{scope}/{field}": {error!s}')


class NothingToExport(Exception):  # noqa: N818
    """Exception raised when an export is requested for an empty set of notes."""

    def __init__(self, message: str = "There are no notes to export."):
        super().__init__(message)


class ExportFailed(Exception):  # noqa: N818
    """Exception raised when the export file cannot be written."""

    def __init__(self, output_path: str, error: Exception | str):
        self.output_path = output_path
        self.error = error
        super().__init__(f'Failed to write export file "{output_path}": {error!s}')


class ProjectCreationFailed(Exception):  # noqa: N818
    """Exception raised when a project folder cannot be created."""

    def __init__(self, path: str, error: Exception | str):
        self.path = path
        self.error = error
        super().__init__(f'Unable to create project folder "{path}": {error!s}')
