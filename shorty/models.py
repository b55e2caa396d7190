from dataclasses import dataclass, asdict


# fmt: off
@dataclass(frozen=True)
class ShortLink:
    id: str   # Unique short identifier, drawn from the base62 alphabet
    url: str  # Destination URL (after scheme normalization)
# fmt: on

    def to_dict(self) -> dict[str, str]:
        return asdict(self)
