from supabase import create_client, Client, ClientOptions
from metaverse_sns.config import settings


class SupabaseClient:
    @classmethod
    def new_client(cls) -> Client:
        """
        Fresh client holding at most one user's session.

        The session lives in memory only and is never refreshed in the
        background, so a client must not outlive the request or connection
        it was created for.
        """
        return create_client(
            settings.supabase_url,
            settings.supabase_key,
            options=ClientOptions(auto_refresh_token=False, persist_session=False),
        )


def get_supabase() -> Client:
    return SupabaseClient.new_client()
