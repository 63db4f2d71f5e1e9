from dataclasses import dataclass


@dataclass
class CachedToken:
    token: str
    expires_at: float  # absolute epoch seconds, as declared by the carrier
    refresh_margin: int = 300

    def is_fresh(self, now: float) -> bool:
        return now < self.expires_at - self.refresh_margin
