"""Tests for the Cloudinary purger and the text sanitiser."""
from __future__ import annotations

import pytest

from hobbie.services import media_service
from hobbie.services.media_service import CloudinaryMediaPurger
from hobbie.util.sanitization import strip_tags


@pytest.fixture()
def cloudinary_calls(monkeypatch):
    calls = []

    def fake_delete_resources(public_ids, **options):
        calls.append((public_ids, options))
        return {"deleted": {public_id: "deleted" for public_id in public_ids}}

    monkeypatch.setattr(media_service.cloudinary.api, "delete_resources", fake_delete_resources)
    return calls


def test_purger_forwards_ids_options_and_credentials(cloudinary_calls) -> None:
    purger = CloudinaryMediaPurger(cloud_name="demo", api_key="key", api_secret="")

    result = purger.delete_resources(("p1", "g1"), {"invalidate": True})

    assert cloudinary_calls == [
        (["p1", "g1"], {"cloud_name": "demo", "api_key": "key", "invalidate": True}),
    ]
    assert result == {"deleted": {"p1": "deleted", "g1": "deleted"}}


def test_purger_ignores_empty_batches(cloudinary_calls) -> None:
    assert CloudinaryMediaPurger().delete_resources([], {"invalidate": True}) is None
    assert cloudinary_calls == []


def test_purger_propagates_cloudinary_errors(monkeypatch) -> None:
    def failing(public_ids, **options):
        raise RuntimeError("rate limited")

    monkeypatch.setattr(media_service.cloudinary.api, "delete_resources", failing)
    with pytest.raises(RuntimeError):
        CloudinaryMediaPurger().delete_resources(["p1"])


def test_purger_reads_application_config() -> None:
    purger = CloudinaryMediaPurger.from_config({
        "CLOUDINARY_CLOUD_NAME": "demo",
        "CLOUDINARY_API_KEY": "key",
        "CLOUDINARY_API_SECRET": "secret",
    })
    assert purger._config == {"cloud_name": "demo", "api_key": "key", "api_secret": "secret"}


@pytest.mark.parametrize(
    "raw, cleaned",
    [
        ("<script>alert(1)</script>Yoga", "alert(1)Yoga"),
        ("  Morning <b>run</b>  ", "Morning run"),
        ("Line one\nLine <i>two</i>", "Line one\nLine two"),
        ("", ""),
        (None, ""),
    ],
)
def test_strip_tags(raw, cleaned) -> None:
    assert strip_tags(raw) == cleaned
