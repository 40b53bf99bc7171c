"""Default configuration values."""

import yaml

from shufflecast.config.schema import FeedConfig, GlobalConfig

DEFAULT_FEEDS = [
    FeedConfig(name="This American Life", url="https://awk.space/tal.xml"),  # type: ignore
    FeedConfig(
        name="Stuff You Should Know",
        url=(  # type: ignore
            "https://omnycontent.com/d/playlist/e73c998e-6e60-432f-8610-ae210140c5b1/"
            "A91018A4-EA4F-4130-BF55-AE270180C327/44710ECC-10BB-48D1-93C7-AE270180C33E/"
            "podcast.rss"
        ),
    ),
]

DEFAULT_GLOBAL_CONFIG = GlobalConfig(default_feeds=DEFAULT_FEEDS)


def get_default_config_content() -> str:
    """Render the default config.yaml content."""
    header = "# ShuffleCast configuration\n"
    data = DEFAULT_GLOBAL_CONFIG.model_dump(mode="json")
    return header + yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
