"""Environment variable file loader.

Lambda functions receive their configuration through real environment
variables; .env files only matter for local runs and tests.
"""

from pathlib import Path

from dotenv import load_dotenv

from xray_lite.telemetry.events import ENV_FILES_LOADED
from xray_lite.telemetry.logger import get_logger

log = get_logger(__name__)

ENV_FILES = (".env.local", ".env")


def load_env_files(project_root: Path | None = None) -> list[str]:
    """Load ``.env.local`` and ``.env``, in that priority order.

    Explicit environment variables always win over .env files.

    Args:
        project_root: Directory holding the .env files. Defaults to the
            current working directory.

    Returns:
        Names of the files that were loaded.
    """
    if project_root is None:
        project_root = Path.cwd()

    # override=False keeps values already set, so files apply highest priority first.
    loaded_files = []
    for name in ENV_FILES:
        env_file = project_root / name
        if env_file.exists():
            load_dotenv(env_file, override=False)
            loaded_files.append(name)

    if loaded_files:
        log.debug(ENV_FILES_LOADED, files=loaded_files, project_root=str(project_root))
    return loaded_files
