from __future__ import annotations

import pytest

from miniship.core.result import Err, Ok
from miniship.output.console import MockConsole
from miniship.services.release.errors import ReleaseError
from miniship.services.release.model import NativeAppDescriptor, NativeAppVersion
from miniship.services.release.nativeapp import add_native_app
from miniship.services.release.prompts import MockPrompter

from ._fakes import FakeStore, refs

NEW = NativeAppDescriptor("shop", "android", "6.0.0")
KEY = str(NEW)

V4 = NativeAppVersion(
    name="4.0.0",
    native_deps=refs("react-native@0.70.0"),
    miniapps=refs("cart@1.0.0"),
)
V5 = NativeAppVersion(
    name="5.0.0",
    native_deps=refs("react-native@0.72.4", "react-native-code-push@8.1.0"),
    miniapps=refs("cart@2.0.0", "checkout@1.0.0"),
    yarn_locks={"container": "a1b2c3"},
    container_version="3.4.0",
)


@pytest.fixture
def store() -> FakeStore:
    return FakeStore(versions={"shop:android": [V4, V5]})


def _add(
    store: FakeStore, copy_from_version: str | None, prompter: MockPrompter | None = None
) -> Ok[None] | Err[ReleaseError]:
    return add_native_app(
        descriptor=NEW,
        copy_from_version=copy_from_version,
        store=store,
        prompter=prompter or MockPrompter(),
        console=MockConsole(),
    )


def test_copy_from_latest(store: FakeStore) -> None:
    assert _add(store, "latest") == Ok(None)

    assert KEY in store.descriptors
    assert store.native_deps[KEY] == V5.native_deps
    assert store.container_miniapps[KEY] == V5.miniapps
    assert "set_yarn_locks" in store.calls
    assert "update_container_version" in store.calls
    assert store.committed == ["Add shop:android:6.0.0 native application"]
    assert store.discarded == 0


def test_copy_from_named_version(store: FakeStore) -> None:
    assert _add(store, "4.0.0") == Ok(None)

    assert store.container_miniapps[KEY] == V4.miniapps
    assert "set_yarn_locks" not in store.calls
    assert "update_container_version" not in store.calls


def test_copy_none(store: FakeStore) -> None:
    assert _add(store, "none") == Ok(None)

    assert KEY in store.descriptors
    assert KEY not in store.container_miniapps
    assert len(store.committed) == 1


def test_unknown_copy_version_discards_transaction(store: FakeStore) -> None:
    result = _add(store, "1.0.0")

    assert isinstance(result, Err)
    assert result.error.kind == "version_not_found"
    assert store.committed == []
    assert store.discarded == 1


def test_prompt_when_copy_source_unspecified(store: FakeStore) -> None:
    prompter = MockPrompter(answers=[True])

    assert _add(store, None, prompter) == Ok(None)

    assert prompter.questions == ["Do you want to copy data from the previous version (5.0.0) ?"]
    assert store.container_miniapps[KEY] == V5.miniapps


def test_prompt_declined(store: FakeStore) -> None:
    assert _add(store, None, MockPrompter(answers=[False])) == Ok(None)
    assert KEY not in store.container_miniapps


def test_first_version_is_added_without_prompt() -> None:
    store = FakeStore()
    prompter = MockPrompter()

    assert _add(store, None, prompter) == Ok(None)

    assert prompter.questions == []
    assert store.committed == ["Add shop:android:6.0.0 native application"]


def test_existing_descriptor_is_rejected(store: FakeStore) -> None:
    store.descriptors.add(KEY)

    result = _add(store, "latest")

    assert isinstance(result, Err)
    assert result.error.kind == "descriptor_exists"
    assert "begin_transaction" not in store.calls


def test_incomplete_descriptor_is_rejected(store: FakeStore) -> None:
    result = add_native_app(
        descriptor=NativeAppDescriptor("shop", "android"),
        copy_from_version="latest",
        store=store,
        prompter=MockPrompter(),
        console=MockConsole(),
    )

    assert isinstance(result, Err)
    assert result.error.kind == "invalid_descriptor"


def test_store_failure_mid_copy_discards_and_propagates(store: FakeStore) -> None:
    error = ReleaseError(kind="store_unavailable", message="push rejected")
    store.failures["add_container_miniapp"] = error

    assert _add(store, "latest") == Err(error)
    assert store.committed == []
    assert store.discarded == 1


def test_commit_failure_discards(store: FakeStore) -> None:
    error = ReleaseError(kind="store_unavailable", message="push rejected")
    store.failures["commit_transaction"] = error

    assert _add(store, "none") == Err(error)
    assert store.discarded == 1


def test_aborted_prompt_discards_and_reraises(store: FakeStore) -> None:
    class AbortingPrompter(MockPrompter):
        def confirm(self, question: str, *, default: bool = False) -> bool:
            raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        _add(store, None, AbortingPrompter())

    assert store.discarded == 1
