from .export import ExportDialog
from .new_project import NewProjectDialog

__all__ = [
    "ExportDialog",
    "NewProjectDialog",
]
