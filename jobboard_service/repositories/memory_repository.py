"""
In-Memory Job Repository

Process-local job store used when MONGODB_URI is not configured and in
tests. Evaluates the subset of the MongoDB query language the service emits:
``$or``, ``$and``, ``$regex``/``$options``, ``$eq``, ``$ne``, ``$in`` and
plain equality, with Mongo-compatible sort/skip/limit.
"""

import copy
import logging
import re
import threading
from collections import OrderedDict
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError

from .base import JobRepositoryInterface, WriteResult

logger = logging.getLogger(__name__)

_REGEX_FLAGS = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL, "x": re.VERBOSE}


def _compile_regex(pattern: Any, options: str = "") -> "re.Pattern":
    if isinstance(pattern, re.Pattern):
        return pattern
    flags = 0
    for opt in options or "":
        flags |= _REGEX_FLAGS.get(opt, 0)
    return re.compile(pattern, flags)


def _match_condition(value: Any, condition: Any) -> bool:
    """Match one field value against a condition (operator dict or literal)."""
    if isinstance(condition, re.Pattern):
        return isinstance(value, str) and condition.search(value) is not None

    if isinstance(condition, dict) and condition and all(k.startswith("$") for k in condition):
        for op, operand in condition.items():
            if op == "$options":
                continue
            if op == "$regex":
                regex = _compile_regex(operand, condition.get("$options", ""))
                if not (isinstance(value, str) and regex.search(value)):
                    return False
            elif op == "$eq":
                if value != operand:
                    return False
            elif op == "$ne":
                if value == operand:
                    return False
            elif op == "$in":
                if value not in operand:
                    return False
            else:
                raise ValueError(f"Unsupported query operator: {op}")
        return True

    return value == condition


def match_document(document: Dict[str, Any], filter: Dict[str, Any]) -> bool:
    """Return True if ``document`` satisfies the Mongo-style ``filter``."""
    for key, condition in filter.items():
        if key == "$or":
            if not any(match_document(document, sub) for sub in condition):
                return False
        elif key == "$and":
            if not all(match_document(document, sub) for sub in condition):
                return False
        elif key.startswith("$"):
            raise ValueError(f"Unsupported query operator: {key}")
        elif not _match_condition(document.get(key), condition):
            return False
    return True


def _sort_key(field: str):
    # Missing/None values sort before everything else, as in MongoDB
    def key(document: Dict[str, Any]):
        value = document.get(field)
        return (0, 0) if value is None else (1, value)
    return key


def _project(document: Dict[str, Any], projection: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    if not projection:
        return document
    include = {k for k, v in projection.items() if v and k != "_id"}
    if include:
        projected = {k: document[k] for k in include if k in document}
        if projection.get("_id", 1) and "_id" in document:
            projected["_id"] = document["_id"]
        return projected
    return {k: v for k, v in document.items() if projection.get(k, 1)}


class InMemoryJobRepository(JobRepositoryInterface):
    """
    Dictionary-backed repository.

    Natural (unsorted) order is insertion order, like a fresh MongoDB
    collection. Reads return copies so callers cannot mutate stored state.
    """

    def __init__(self):
        self._documents: "OrderedDict[Any, Dict[str, Any]]" = OrderedDict()
        self._lock = threading.Lock()

    def _snapshot(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [copy.deepcopy(doc) for doc in self._documents.values()]

    def find_one(self, filter: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        for document in self._snapshot():
            if match_document(document, filter):
                return document
        return None

    def find(
        self,
        filter: Dict[str, Any],
        projection: Optional[Dict[str, Any]] = None,
        sort: Optional[List[tuple]] = None,
        limit: int = 0,
        skip: int = 0,
    ) -> List[Dict[str, Any]]:
        results = [doc for doc in self._snapshot() if match_document(doc, filter)]

        if sort:
            # Stable sorts applied from the least significant key up
            for field, direction in reversed(sort):
                results.sort(key=_sort_key(field), reverse=direction != ASCENDING)
        if skip > 0:
            results = results[skip:]
        if limit > 0:
            results = results[:limit]

        return [_project(doc, projection) for doc in results]

    def count_documents(self, filter: Dict[str, Any]) -> int:
        return sum(1 for doc in self._snapshot() if match_document(doc, filter))

    def insert_one(self, document: Dict[str, Any]) -> WriteResult:
        # Mirrors pymongo: the caller's dict receives the generated _id
        document.setdefault("_id", ObjectId())
        with self._lock:
            if document["_id"] in self._documents:
                raise DuplicateKeyError(f"duplicate key: _id {document['_id']}")
            self._documents[document["_id"]] = copy.deepcopy(document)
        return WriteResult(matched_count=0, modified_count=1, inserted_id=str(document["_id"]))

    def delete_one(self, filter: Dict[str, Any]) -> WriteResult:
        with self._lock:
            for key, document in self._documents.items():
                if match_document(document, filter):
                    del self._documents[key]
                    return WriteResult(matched_count=1, modified_count=1)
        return WriteResult(matched_count=0, modified_count=0)

    def ensure_indexes(self) -> None:
        logger.debug("In-memory job store has no indexes to create")

    def clear(self) -> None:
        """Drop every stored document."""
        with self._lock:
            self._documents.clear()
