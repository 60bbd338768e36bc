"""
AnkiConnect client.

Talks to the AnkiConnect add-on over its JSON-RPC style HTTP interface:
every request is a POST of ``{"action", "version", "key", "params"}`` and
every response is ``{"result", "error"}``.

Usage:
    anki = AnkiConnect()
    notes = anki.notes_info(anki.find_notes('"deck:My Deck 4.0"'))
"""

import json
import logging
from typing import Any, Dict, List, Optional, Sequence
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from kotoba import settings
from kotoba.models import AnkiNote

logger = logging.getLogger(__name__)


class AnkiConnectError(RuntimeError):
    """AnkiConnect returned an error or could not be reached."""


class AnkiConnect:
    """
    Minimal AnkiConnect client.

    Args:
        url: Address of the AnkiConnect server.
        api_key: Optional API key configured in the add-on.
        timeout: Socket timeout in seconds.
        check_version: Verify the server speaks the expected API version.
    """

    def __init__(
        self,
        url: str = settings.ANKI_URL,
        api_key: Optional[str] = settings.ANKI_API_KEY,
        timeout: float = 30.0,
        check_version: bool = True,
    ):
        self.url = url
        self.api_key = api_key
        self.timeout = timeout

        if check_version:
            version = self.version()
            if version != settings.ANKI_VERSION:
                raise AnkiConnectError(
                    f"Expected AnkiConnect version '{settings.ANKI_VERSION}' "
                    f"but got '{version}' instead!"
                )

    def invoke(self, action: str, **params: Any) -> Any:
        """
        Call an AnkiConnect action.

        Args:
            action: Action name (e.g., "findNotes").
            **params: Action parameters.

        Returns:
            The ``result`` member of the response.

        Raises:
            AnkiConnectError: If the server reports an error or the request fails.
        """
        payload: Dict[str, Any] = {"action": action, "version": settings.ANKI_VERSION}
        if self.api_key:
            payload["key"] = self.api_key
        if params:
            payload["params"] = params

        logger.debug(f"AnkiConnect {action}")
        req = Request(
            self.url,
            data=json.dumps(payload, ensure_ascii=False).encode("utf-8"),
            headers={"Content-Type": "application/json"},
            method="POST",
        )
        try:
            with urlopen(req, timeout=self.timeout) as resp:
                raw = resp.read().decode("utf-8")
        except HTTPError as e:
            raise AnkiConnectError(f"AnkiConnect HTTP error {e.code}: {action}") from e
        except URLError as e:
            raise AnkiConnectError(f"AnkiConnect connection error: {e}") from e

        try:
            response = json.loads(raw)
        except ValueError as e:
            raise AnkiConnectError(f"Malformed AnkiConnect response to {action}: {raw}") from e

        if not isinstance(response, dict) or "result" not in response or "error" not in response:
            raise AnkiConnectError(f"Malformed AnkiConnect response to {action}: {raw}")
        if response["error"] is not None:
            raise AnkiConnectError(f"{action}: {response['error']}")
        return response["result"]

    # =========================================================================
    # Misc
    # =========================================================================

    def version(self) -> int:
        return self.invoke("version")

    # =========================================================================
    # Notes
    # =========================================================================

    def find_notes(self, query: str) -> List[int]:
        return self.invoke("findNotes", query=query)

    def notes_info(self, notes: Sequence[int]) -> List[AnkiNote]:
        """Fetch full note information, fields flattened to plain strings."""
        result = self.invoke("notesInfo", notes=list(notes))
        return [AnkiNote.from_notes_info(entry) for entry in result]

    def add_note(self, note: AnkiNote) -> int:
        """Add a note and store the new id on it."""
        note_id = self.invoke("addNote", note=note.to_payload())
        note.note_id = note_id
        return note_id

    def update_note_fields(self, note_id: int, fields: Dict[str, str]) -> None:
        self.invoke("updateNoteFields", note={"id": note_id, "fields": dict(fields)})

    def add_tags(self, notes: Sequence[int], tags: str) -> None:
        self.invoke("addTags", notes=list(notes), tags=tags)

    def remove_tags(self, notes: Sequence[int], tags: str) -> None:
        self.invoke("removeTags", notes=list(notes), tags=tags)

    # =========================================================================
    # Cards
    # =========================================================================

    def find_cards(self, query: str) -> List[int]:
        return self.invoke("findCards", query=query)

    def suspend(self, cards: Sequence[int]) -> bool:
        return self.invoke("suspend", cards=list(cards))

    def unsuspend(self, cards: Sequence[int]) -> bool:
        return self.invoke("unsuspend", cards=list(cards))

    def set_specific_value_of_card(
        self,
        card: int,
        keys: Sequence[str],
        values: Sequence[Any],
    ) -> List[Any]:
        """Set raw card properties, e.g. ``("due",)`` for the new-card order."""
        return self.invoke(
            "setSpecificValueOfCard",
            card=card,
            keys=list(keys),
            newValues=list(values),
        )


def deck_query(deck: str = settings.DECK_NAME, model: str = settings.MODEL_NAME) -> str:
    """Search query selecting the notes of the study deck."""
    return f'"deck:{deck}" "note:{model}"'
