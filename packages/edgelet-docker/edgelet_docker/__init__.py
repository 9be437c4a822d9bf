"""edgelet-docker — Docker module runtime for an edge orchestration agent.

Lets the agent manage its modules through a container engine's REST API:
image pulls and removal, container create/start/stop/restart/remove, and
listing of the containers the agent owns.

Layers (bottom to top):
    1. Core      — runtime-neutral ModuleSpec, Module and capability ABCs
    2. Models    — pydantic shapes of engine request bodies
    3. Helpers   — env merging, network attachment, credential encoding
    4. Client    — async httpx wrapper over the engine API
    5. Runtime   — DockerModuleRuntime, the façade the agent holds
"""

__version__ = "0.1.0"

from edgelet_docker.auth import RegistryAuthConfig
from edgelet_docker.core import ModuleRuntimeState, ModuleSpec, ModuleStatus
from edgelet_docker.module import MODULE_TYPE, DockerConfig, DockerModule
from edgelet_docker.runtime import DockerModuleRuntime

__all__ = [
    "__version__",
    "MODULE_TYPE",
    "DockerConfig",
    "DockerModule",
    "DockerModuleRuntime",
    "ModuleRuntimeState",
    "ModuleSpec",
    "ModuleStatus",
    "RegistryAuthConfig",
]
