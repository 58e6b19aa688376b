"""Supabase repository for user profiles."""

from dataclasses import dataclass

from supabase import Client

from diet_tracker.adapters.documents import decode_profile, encode_profile
from diet_tracker.adapters.supabase_support import execute
from diet_tracker.domain.profiles import Profile
from diet_tracker.services.profiles import ProfileRepository

_TABLE = "profiles"


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profiles keyed by user id."""

    client: Client

    def get_profile(self, user_id: str) -> Profile | None:
        """Return the stored profile, if present."""
        rows = execute(
            self.client.table(_TABLE).select("*").eq("id", user_id).limit(1),
            "load profile",
        )
        if not rows:
            return None
        return decode_profile(rows[0])

    def save_profile(self, profile: Profile) -> None:
        """Insert or replace a profile row."""
        execute(
            self.client.table(_TABLE).upsert(encode_profile(profile)),
            "save profile",
        )
