"""
Write pipeline outputs as pretty-printed JSON files.

One file per view in the output directory. A failure to write one file is
logged and does not stop the others.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from tqdm import tqdm

from ..constants import JSON_INDENT

logger = logging.getLogger(__name__)


def write_json_file(path: Path, data: Any) -> bool:
    """
    Write data to path as indented JSON, creating parent directories.

    Returns:
        True if successful
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=JSON_INDENT, ensure_ascii=False)
        logger.debug(f"Successfully wrote to {path}")
        return True
    except (OSError, TypeError, ValueError) as e:
        logger.error(f"Error writing to {path}: {e}")
        return False


def write_outputs(views: Dict[str, Any], output_dir: Path) -> List[str]:
    """
    Write every view to output_dir/<name>.json.

    Returns:
        Names of the views that failed to write
    """
    failed = []
    for name, data in tqdm(views.items(), desc='Writing outputs', total=len(views)):
        if not write_json_file(output_dir / f'{name}.json', data):
            failed.append(name)

    written = len(views) - len(failed)
    logger.info(f"Wrote {written}/{len(views)} output files to {output_dir}")
    return failed
