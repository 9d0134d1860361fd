"""Settings validation."""

import pytest
from pydantic import ValidationError

from humanika.core.config import Settings

_REQUIRED = {
    "database_url": "postgresql+asyncpg://u:p@localhost/db",
    "secret_key": "s3cret",
}


def test_reviewer_roles_are_parsed_and_upper_cased() -> None:
    settings = Settings(**_REQUIRED, approval_reviewer_roles="dpo, bph ,")
    assert settings.reviewer_roles == frozenset({"DPO", "BPH"})


def test_unknown_reviewer_role_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(**_REQUIRED, approval_reviewer_roles="DPO,KETUA")


def test_secret_key_is_required(monkeypatch) -> None:
    monkeypatch.delenv("SECRET_KEY", raising=False)
    with pytest.raises(ValidationError):
        Settings(database_url=_REQUIRED["database_url"], secret_key="", _env_file=None)


def test_bulk_limit_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        Settings(**_REQUIRED, approval_bulk_max_items=0)
