"""Authoring-side access to playbooks with a local fallback store."""

from validation_playbooks.client.library import PlaybookLibrary
from validation_playbooks.client.local import LocalPlaybookStore
from validation_playbooks.client.remote import RemotePlaybookStore
from validation_playbooks.client.stores import FallbackPlaybookStore, PlaybookStore

__all__ = [
    "FallbackPlaybookStore",
    "LocalPlaybookStore",
    "PlaybookLibrary",
    "PlaybookStore",
    "RemotePlaybookStore",
]
