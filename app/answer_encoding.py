"""Kodierung der ausgewählten Optionen einer Antwort als Textfeld ("3,7,9")."""
from typing import Iterable, List, Optional

DELIMITER = ","


def encode_selected_options(option_ids: Optional[Iterable[int]]) -> Optional[str]:
    """Leere oder fehlende Auswahl ergibt None, niemals einen Leerstring."""
    if not option_ids:
        return None
    encoded = DELIMITER.join(str(int(option_id)) for option_id in option_ids)
    return encoded or None


def decode_selected_options(value: Optional[str]) -> List[int]:
    if not value:
        return []
    return [int(part) for part in value.split(DELIMITER) if part.strip()]
