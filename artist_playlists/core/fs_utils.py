import json
import os
from pathlib import Path
import tempfile
from typing import Any, Callable, Optional

# The only file written through here is the client's token store.
PRIVATE_FILE_MODE = 0o600


def ensure_parent_dir(path: Path | str) -> Path:
    """
    Create the parent directory of `path` (with `~` expanded) and return the
    expanded path.
    Example:
      ensure_parent_dir("~/.artist_playlists/session.json")
    """
    target = Path(path).expanduser()
    target.parent.mkdir(parents=True, exist_ok=True)
    return target


def write_json(path: str | Path, data: Any, mode: int = PRIVATE_FILE_MODE) -> None:
    """
    Write JSON data to a file using an atomic replace.

    The content goes to a temporary file in the target directory, is fsynced,
    then moved over the target with os.replace. Readers see either the old
    document or the new one, never a truncated file. The file ends up with
    `mode` permissions, owner-only by default since it holds tokens.
    """
    target_path = ensure_parent_dir(path)

    fd, tmp_path_str = tempfile.mkstemp(
        dir=str(target_path.parent),
        prefix=target_path.name,
        suffix=".tmp",
    )
    tmp_path = Path(tmp_path_str)

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.flush()
            os.fsync(f.fileno())

        os.chmod(tmp_path, mode)
        os.replace(tmp_path, target_path)
    except Exception:
        try:
            tmp_path.unlink(missing_ok=True)
        except OSError:
            pass
        raise


def read_json(
    path: str | Path,
    default: Any = None,
    *,
    on_error: Optional[Callable[[Exception], None]] = None,
) -> Any:
    """
    Read a JSON file safely.

    - returns `default` if the file does not exist
    - returns `default` if JSON is invalid or corrupted (optionally calling on_error)
    """
    try:
        with open(Path(path).expanduser(), "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        return default
    except json.JSONDecodeError as e:
        if on_error:
            on_error(e)
        return default


def remove_file(path: str | Path) -> None:
    """Delete a file if it exists."""
    Path(path).expanduser().unlink(missing_ok=True)
