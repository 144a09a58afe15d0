from pathlib import Path

# Config file location and its environment override
DEFAULT_CONFIG_FILE = Path("config/config.hjson")
CONFIG_LOCATION_ENV = "LEMMY_CONFIG_LOCATION"

# Full database URL override, bypassing the database block
DATABASE_URL_ENV = "LEMMY_DATABASE_URL"

# Placeholder hostname shipped in the default config; must be replaced
UNSET_HOSTNAME = "unset"

YAML_SUFFIXES = (".yaml", ".yml")

# Words rejected in names, titles and content. Operators extend it with
# `additional_slurs`.
SLUR_PATTERN = (
    r"(fag(g|got|tard)?\b|cock\s?sucker(s|ing)?|ni((g{2,}|q)+|[gq]{2,})[e3r]+(s|z)?"
    r"|mudslime?s?|kikes?|\bspi(c|k)s?\b|\bchinks?|gooks?|bitch(es|ing|y)?"
    r"|whor(es?|ing)|\btr(a|@)nn?(y|ies?)|\b(b|re|r)tard(ed)?s?)"
)

WEBFINGER_COMMUNITY_PREFIX = "group"
WEBFINGER_USER_PREFIX = "acct"
