import gc

import pytest

from core.models.errors import NotFoundError
from core.staging.preview import PreviewRegistry


def test_create_and_resolve() -> None:
    registry = PreviewRegistry()
    handle = registry.create(b"bytes", "image/png")

    assert handle.url.startswith("blob:photodeck/")
    assert registry.resolve(handle.url) == (b"bytes", "image/png")
    assert handle.url in registry
    assert len(registry) == 1
    assert not handle.released


def test_urls_are_unique() -> None:
    registry = PreviewRegistry()
    urls = {registry.create(b"x", "image/png").url for _ in range(20)}

    assert len(urls) == 20


def test_release_revokes_exactly_once() -> None:
    registry = PreviewRegistry()
    handle = registry.create(b"bytes", "image/png")

    handle.release()
    handle.release()

    assert handle.released
    assert registry.created == 1
    assert registry.revoked == 1
    with pytest.raises(NotFoundError):
        registry.resolve(handle.url)


def test_context_manager_releases() -> None:
    registry = PreviewRegistry()

    with registry.create(b"bytes", "image/png") as handle:
        assert handle.url in registry

    assert handle.released
    assert len(registry) == 0


def test_dropped_handle_is_revoked_on_collection() -> None:
    registry = PreviewRegistry()
    handle = registry.create(b"bytes", "image/png")
    url = handle.url

    del handle
    gc.collect()

    assert url not in registry
    assert registry.revoked == 1


def test_resolve_unknown_url() -> None:
    with pytest.raises(NotFoundError) as exc:
        PreviewRegistry().resolve("blob:photodeck/missing")

    assert exc.value.details == {"url": "blob:photodeck/missing"}
