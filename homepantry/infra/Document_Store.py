"""JSON document store: one file per (household, collection) holding a list of documents."""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

from homepantry.infra.paths import DATA_DIR, collection_file
from homepantry.utilities.errors import StorageError

logger = logging.getLogger(__name__)


class DocumentStore:
    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = Path(base_dir) if base_dir is not None else DATA_DIR

    def load(self, home_id: str, collection: str) -> List[Dict[str, Any]]:
        '''Returns the stored documents, or an empty list when the collection does not exist yet.'''
        path = collection_file(self.base_dir, home_id, collection)
        if not path.exists():
            return []
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error("Corrupt collection file %s: %s", path, e)
            raise StorageError(f"Stored {collection} for {home_id} is unreadable") from e
        return data if isinstance(data, list) else []

    def save(self, home_id: str, collection: str, documents: List[Dict[str, Any]]) -> None:
        '''Replaces the whole collection through a temp file so readers never see a partial write.'''
        path = collection_file(self.base_dir, home_id, collection)
        os.makedirs(path.parent, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(path.parent), prefix=f".{collection}_", suffix=".json")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as tmp:
                json.dump(documents, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, str(path))
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
        logger.debug("Saved %d documents to %s/%s", len(documents), home_id, collection)
