"""Bootstrap and maintain AI-assistant workflow files in a project."""

from .config import Config, FilesystemTarget
from .errors import (
    ConfigError,
    FilesystemError,
    OrchestrationError,
    RegistrationError,
    RenderError,
    ScaffoldError,
)
from .initializers import (
    ApplyResult,
    CommandFormat,
    CommandSetInitializer,
    ConfigFileInitializer,
    DirectoryInitializer,
    Initializer,
    Kind,
    SeedFileInitializer,
)
from .orchestrator import Orchestrator
from .providers import TOOLS, ToolProvider, WorkspaceProvider
from .registry import Registration, Registry, build_registry
from .templates import TemplateRenderer

__version__ = "0.1.0"
