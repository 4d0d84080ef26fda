from metaverse_sns.config.settings import settings

__all__ = ["settings"]
