"""Pydantic schema for the page digest.

Defines PageDigest - the bounded text summary handed from retrieval to the prompt.
"""

from typing import Tuple
from pydantic import BaseModel, ConfigDict

HEADER_SEPARATOR = " | "

# Label text is read by the model; changing it changes model behavior.
DIGEST_LABELS = (
    "Title",
    "Meta Description",
    "Main Headers (H1)",
    "Sub Headers (H2)",
    "Body Content",
)


class PageDigest(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    meta_description: str
    h1s: Tuple[str, ...] = ()
    h2s: Tuple[str, ...] = ()
    body_excerpt: str

    @property
    def h1_text(self) -> str:
        return HEADER_SEPARATOR.join(self.h1s)

    @property
    def h2_text(self) -> str:
        return HEADER_SEPARATOR.join(self.h2s)

    def is_empty(self) -> bool:
        return not any([self.title, self.meta_description, self.h1s, self.h2s, self.body_excerpt])

    def render(self) -> str:
        """Labeled multi-line form embedded into the prompt."""
        values = (self.title, self.meta_description, self.h1_text, self.h2_text, self.body_excerpt)
        lines = [f"{label}: {value}" for label, value in zip(DIGEST_LABELS, values)]
        return "\n".join(lines).strip()
