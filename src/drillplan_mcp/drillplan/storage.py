"""Snapshot persistence: a Firestore document per coach, with a local JSON file fallback."""

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Literal

import httpx
from pydantic import ValidationError

from drillplan_mcp.drillplan.auth import FirebaseAuth
from drillplan_mcp.drillplan.exceptions import APIError, DrillPlanError, StorageError
from drillplan_mcp.drillplan.models import AppSnapshot, User

logger = logging.getLogger(__name__)

FIRESTORE_URL = "https://firestore.googleapis.com/v1/projects/{project_id}/databases/(default)/documents"
USERS_COLLECTION = "users"


def snapshot_from_dict(data: dict) -> AppSnapshot:
    if not isinstance(data, dict):
        raise StorageError(f"Saved data is a {type(data).__name__}, not an object")
    try:
        return AppSnapshot.model_validate({
            "teamName": data.get("teamName") or "",
            "drills": data.get("drills") or [],
            "variations": data.get("variations") or {},
        })
    except ValidationError as e:
        raise StorageError(f"Saved data has the wrong shape: {e}") from e


class LocalSnapshotStore:
    """The unkeyed local slot: one JSON file holding the last saved snapshot."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def save(self, snapshot: AppSnapshot) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(snapshot.model_dump_json(by_alias=True, indent=2), encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Cannot write {self.path}: {e}") from e
        logger.info("Saved snapshot to %s", self.path)

    def load(self) -> AppSnapshot | None:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e
        return snapshot_from_dict(data)


class CloudSnapshotStore:
    """Snapshot stored as the Firestore document ``users/{uid}``."""

    def __init__(
        self,
        auth: FirebaseAuth,
        project_id: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._auth = auth
        self._base_url = FIRESTORE_URL.format(project_id=project_id)
        self._transport = transport

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        await self._auth.ensure_fresh()

        async with httpx.AsyncClient(timeout=30, transport=self._transport) as client:
            response = await client.request(
                method,
                f"{self._base_url}/{path}",
                headers=self._auth.get_auth_header(),
                **kwargs,
            )

            if response.status_code == 401:
                await self._auth.refresh()
                response = await client.request(
                    method,
                    f"{self._base_url}/{path}",
                    headers=self._auth.get_auth_header(),
                    **kwargs,
                )

            return response

    async def save(self, uid: str, snapshot: AppSnapshot) -> None:
        data = snapshot.model_dump(by_alias=True)
        data["lastUpdated"] = datetime.now(timezone.utc)
        response = await self._request(
            "PATCH",
            f"{USERS_COLLECTION}/{uid}",
            json={"fields": {k: self._to_firestore_value(v) for k, v in data.items()}},
        )
        if response.status_code >= 400:
            raise APIError(f"Cloud save failed: {response.text}", status_code=response.status_code)
        logger.info("Saved snapshot for user %s to Firestore", uid)

    async def load(self, uid: str) -> AppSnapshot | None:
        response = await self._request("GET", f"{USERS_COLLECTION}/{uid}")
        if response.status_code == 404:
            return None
        if response.status_code >= 400:
            raise APIError(f"Cloud load failed: {response.text}", status_code=response.status_code)
        return snapshot_from_dict(self._parse_firestore_doc(response.json()))

    # --- Firestore helpers ---

    @staticmethod
    def _parse_firestore_value(val: dict):
        if "stringValue" in val:
            return val["stringValue"]
        if "integerValue" in val:
            return int(val["integerValue"])
        if "doubleValue" in val:
            return float(val["doubleValue"])
        if "booleanValue" in val:
            return val["booleanValue"]
        if "timestampValue" in val:
            return val["timestampValue"]
        if "arrayValue" in val:
            items = val["arrayValue"].get("values", [])
            return [CloudSnapshotStore._parse_firestore_value(v) for v in items]
        if "mapValue" in val:
            fields = val["mapValue"].get("fields", {})
            return {k: CloudSnapshotStore._parse_firestore_value(v) for k, v in fields.items()}
        if "nullValue" in val:
            return None
        return None

    @staticmethod
    def _parse_firestore_doc(doc: dict) -> dict:
        fields = doc.get("fields", {})
        return {k: CloudSnapshotStore._parse_firestore_value(v) for k, v in fields.items()}

    @staticmethod
    def _to_firestore_value(value) -> dict:
        if value is None:
            return {"nullValue": None}
        if isinstance(value, bool):
            return {"booleanValue": value}
        if isinstance(value, int):
            return {"integerValue": str(value)}
        if isinstance(value, float):
            return {"doubleValue": value}
        if isinstance(value, str):
            return {"stringValue": value}
        if isinstance(value, datetime):
            return {"timestampValue": value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")}
        if isinstance(value, (list, tuple)):
            return {"arrayValue": {"values": [CloudSnapshotStore._to_firestore_value(v) for v in value]}}
        if isinstance(value, dict):
            return {"mapValue": {"fields": {k: CloudSnapshotStore._to_firestore_value(v) for k, v in value.items()}}}
        raise TypeError(f"Cannot store {type(value).__name__} in Firestore")


@dataclass(frozen=True)
class SaveResult:
    location: Literal["cloud", "local"]
    notice: str


class SnapshotStore:
    """Routes snapshots to the cloud for a signed-in coach and to the local file otherwise."""

    def __init__(self, local: LocalSnapshotStore, cloud: CloudSnapshotStore | None = None):
        self.local = local
        self.cloud = cloud

    async def save(self, snapshot: AppSnapshot, user: User | None = None) -> SaveResult:
        if user is not None and self.cloud is not None:
            try:
                await self.cloud.save(user.uid, snapshot)
                return SaveResult("cloud", "Success: Saved to Cloud!")
            except (DrillPlanError, httpx.HTTPError) as e:
                logger.warning("Cloud save failed for user %s: %s", user.uid, e)
                self.local.save(snapshot)
                return SaveResult("local", "Error saving to cloud. Saved to local instead.")

        self.local.save(snapshot)
        return SaveResult("local", "Success: Saved to Device (Local)!")

    async def load(self, user: User | None = None) -> AppSnapshot | None:
        if user is not None and self.cloud is not None:
            return await self.cloud.load(user.uid)
        return self.local.load()
