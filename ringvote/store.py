"""JSON-backed registry of key images that have already been spent."""

from __future__ import annotations

import json
import logging
import os
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List

from .curve import CurvePoint
from .encoding import point_from_hex, point_to_hex
from .errors import InvalidKeyImage, KeyImageReused, RingSignatureError

logger = logging.getLogger(__name__)


@dataclass
class KeyImageRecord:
    """A key image accepted for one case."""

    case_id: str
    key_image: CurvePoint
    recorded_at: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "case_id": self.case_id,
            "key_image": point_to_hex(self.key_image),
            "recorded_at": self.recorded_at,
        }

    @staticmethod
    def from_dict(data: Dict[str, str]) -> "KeyImageRecord":
        return KeyImageRecord(
            case_id=data["case_id"],
            key_image=point_from_hex(data["key_image"], error=InvalidKeyImage),
            recorded_at=data.get("recorded_at", ""),
        )


class KeyImageStore:
    """Persist key images per case and refuse to record one twice.

    ``record`` performs the membership check and the insert under a single
    lock, so concurrent callers in one process cannot both accept the same
    key image.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        self._lock = threading.Lock()
        self._ensure_file()

    def _ensure_file(self) -> None:
        if not os.path.exists(self.path):
            with open(self.path, "w", encoding="utf-8") as handle:
                json.dump({"key_images": []}, handle, indent=2)

    def _load(self) -> Dict[str, list]:
        with open(self.path, "r", encoding="utf-8") as handle:
            try:
                return json.load(handle)
            except json.JSONDecodeError as exc:
                logger.error("Key image registry %s is not valid JSON", self.path)
                raise RingSignatureError(f"Key image registry '{self.path}' is corrupt") from exc

    def _save(self, payload: Dict[str, list]) -> None:
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2)
        os.replace(tmp_path, self.path)

    @staticmethod
    def _matches(raw: Dict[str, str], case_id: str, key_image_hex: str) -> bool:
        return raw.get("case_id") == case_id and raw.get("key_image", "").lower() == key_image_hex

    def contains(self, case_id: str, key_image: CurvePoint) -> bool:
        key_image_hex = point_to_hex(key_image)
        with self._lock:
            payload = self._load()
        return any(self._matches(raw, case_id, key_image_hex) for raw in payload.get("key_images", []))

    def record(self, case_id: str, key_image: CurvePoint) -> KeyImageRecord:
        key_image_hex = point_to_hex(key_image)
        with self._lock:
            payload = self._load()
            entries = payload.setdefault("key_images", [])
            if any(self._matches(raw, case_id, key_image_hex) for raw in entries):
                logger.warning("Rejected reused key image %s for case %s", key_image_hex[:16], case_id)
                raise KeyImageReused(
                    f"Key image already used for case '{case_id}'",
                    details=key_image_hex,
                )
            record = KeyImageRecord(
                case_id=case_id,
                key_image=key_image,
                recorded_at=datetime.now(timezone.utc).isoformat(),
            )
            entries.append(record.to_dict())
            self._save(payload)
        logger.info("Recorded key image %s for case %s", key_image_hex[:16], case_id)
        return record

    def list_case(self, case_id: str) -> List[KeyImageRecord]:
        with self._lock:
            payload = self._load()
        return [
            KeyImageRecord.from_dict(raw)
            for raw in payload.get("key_images", [])
            if raw.get("case_id") == case_id
        ]


__all__ = ["KeyImageRecord", "KeyImageStore"]
