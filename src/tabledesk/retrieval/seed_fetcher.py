"""One-shot fetch of seed rows from a remote users endpoint."""

import random
from typing import Any, List, Optional

import requests
from pydantic import BaseModel, ConfigDict, ValidationError

from tabledesk.table.defaults import DEFAULT_ROLE
from tabledesk.table.models import Row, make_row
from tabledesk.utils.id_generator import new_row_id
from tabledesk.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_SEED_URL = "https://jsonplaceholder.typicode.com/users"
SEED_AGE_RANGE = (18, 60)


class SeedFetchError(RuntimeError):
    """The seed source could not be reached or returned unusable data."""


class SeedCompany(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None


class SeedAddress(BaseModel):
    model_config = ConfigDict(extra="allow")

    city: Optional[str] = None


class SeedUser(BaseModel):
    """Loosely-typed user record as served by the seed source."""
    model_config = ConfigDict(extra="allow")

    id: Optional[Any] = None
    name: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    company: Optional[SeedCompany] = None
    address: Optional[SeedAddress] = None


def map_seed_record(record: SeedUser, index: int, rng: random.Random) -> Row:
    """
    Map one seed record into a Row.

    Args:
        record: Parsed seed record
        index: 0-based position in the response (used for placeholders)
        rng: Source of the random age

    Returns:
        Row with id/name/email/age/role plus phone, website, company and address
    """
    position = index + 1
    return make_row({
        "id": str(record.id) if record.id not in (None, "") else new_row_id(index),
        "name": record.name or record.username or f"User {position}",
        "email": record.email or f"user{position}@example.com",
        "age": rng.randint(*SEED_AGE_RANGE),
        "role": DEFAULT_ROLE,
        "phone": record.phone,
        "website": record.website,
        "company": record.company.name if record.company else None,
        "address": (record.address.city if record.address else None) or "",
    })


class SeedFetcher:
    """Fetches and maps seed rows. No retries: one call, one request."""

    def __init__(
        self,
        url: str = DEFAULT_SEED_URL,
        *,
        timeout_seconds: float = 20,
        user_agent: str = "tabledesk/0.1",
        rng_seed: Optional[int] = None,
    ):
        self.url = url
        self.timeout = timeout_seconds
        self.user_agent = user_agent
        self._rng = random.Random(rng_seed)

    def _get_headers(self) -> dict:
        return {
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }

    def fetch(self) -> List[Row]:
        """
        Fetch the seed records and map them into rows.

        Raises:
            SeedFetchError: On transport/HTTP errors or an unexpected payload
        """
        try:
            response = requests.get(self.url, headers=self._get_headers(), timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            raise SeedFetchError(f"Failed to fetch seed data from {self.url}: {e}") from e
        except ValueError as e:
            raise SeedFetchError(f"Seed data from {self.url} is not JSON: {e}") from e

        if not isinstance(payload, list):
            raise SeedFetchError(f"Seed data from {self.url} must be a list, got {type(payload).__name__}")

        try:
            records = [SeedUser.model_validate(item) for item in payload]
        except ValidationError as e:
            raise SeedFetchError(f"Seed data from {self.url} has malformed records: {e}") from e

        rows = [map_seed_record(record, i, self._rng) for i, record in enumerate(records)]
        logger.info(f"Fetched {len(rows)} seed rows from {self.url}")
        return rows
