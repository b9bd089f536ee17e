import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)

PUBLIC_DIR = "public"
USER_ASSETS = Path("src") / "assets"
OUTPUT_ASSETS = Path("dist") / "assets"
FRAMEWORK_ASSETS = Path(__file__).parent / "static"


def copy_assets(src: Path, dest: Path) -> list[Path]:
    """Copy the tree under ``src`` into ``dest``; a missing ``src`` copies nothing."""
    if not src.exists():
        return []

    copied: list[Path] = []
    for entry in sorted(src.iterdir()):
        target = dest / entry.name
        if entry.is_dir():
            target.mkdir(parents=True, exist_ok=True)
            copied.extend(copy_assets(entry, target))
        else:
            shutil.copyfile(entry, target)
            logger.debug("copied %s -> %s", entry, target)
            copied.append(target)
    return copied


def collect_assets(
    project_root: Path,
    out_dir: Path = OUTPUT_ASSETS,
    framework_assets: Path = FRAMEWORK_ASSETS,
) -> list[Path]:
    """Gather the project's and the framework's static assets into ``out_dir``.

    ``out_dir`` is taken relative to ``project_root`` unless it is absolute.
    Framework files overwrite project files of the same name. The project's
    ``public`` directory is served from the root of the build, so it lands
    in the parent of ``out_dir``.
    """
    dest = project_root / out_dir
    dest.mkdir(parents=True, exist_ok=True)

    copied = copy_assets(project_root / PUBLIC_DIR, dest.parent)
    copied += copy_assets(project_root / USER_ASSETS, dest)
    copied += copy_assets(framework_assets, dest)
    logger.info("collected %d asset file(s) into %s", len(copied), dest)
    return copied
