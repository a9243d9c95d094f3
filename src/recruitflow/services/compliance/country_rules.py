# This project was developed with assistance from AI tools.
"""Destination-country eligibility rules.

The built-in table covers the main Gulf markets; anything else falls back
to DEFAULT. Deployments can replace the table with a YAML file
(``COUNTRY_RULES_PATH``) shaped like::

    Saudi Arabia:
      default_age_limit: {min: 21, max: 45}
      role_age_limits:
        Driver: {min: 25, max: 55}
      checks_pcc: true
      mandatory_documents: [passport, passport_photos, full_photo]
"""

import logging
from collections.abc import Mapping
from pathlib import Path

import yaml

from ...enums import DocumentType
from ...schemas.compliance import AgeLimit, CountryRule

logger = logging.getLogger(__name__)

DEFAULT_RULE_KEY = "DEFAULT"
_DEFAULT_KEY = DEFAULT_RULE_KEY.lower()

COUNTRY_RULES: dict[str, CountryRule] = {
    "Saudi Arabia": CountryRule(
        country_name="Saudi Arabia",
        default_age_limit=AgeLimit(min=21, max=45),
        role_age_limits={
            "Housemaid": AgeLimit(min=21, max=55),
            "Driver": AgeLimit(min=25, max=55),
            "Construction": AgeLimit(min=21, max=50),
        },
        checks_pcc=True,
        mandatory_documents=[
            DocumentType.PASSPORT,
            DocumentType.PASSPORT_PHOTOS,
            DocumentType.FULL_PHOTO,
        ],
        medical_required=True,
    ),
    "United Arab Emirates": CountryRule(
        country_name="United Arab Emirates",
        default_age_limit=AgeLimit(min=21, max=50),
        role_age_limits={
            "Construction": AgeLimit(min=21, max=50),
            "Hospitality": AgeLimit(min=21, max=40),
        },
        checks_pcc=True,
        mandatory_documents=[DocumentType.PASSPORT, DocumentType.PASSPORT_PHOTOS],
        medical_required=True,
    ),
    "Qatar": CountryRule(
        country_name="Qatar",
        default_age_limit=AgeLimit(min=21, max=45),
        role_age_limits={
            "Hospitality": AgeLimit(min=21, max=45),
            "Construction": AgeLimit(min=21, max=55),
        },
        checks_pcc=True,
        mandatory_documents=[
            DocumentType.PASSPORT,
            DocumentType.MEDICAL_REPORT,
            DocumentType.POLICE_CLEARANCE,
        ],
        medical_required=True,
    ),
    DEFAULT_RULE_KEY: CountryRule(
        country_name="General",
        default_age_limit=AgeLimit(min=18, max=55),
        checks_pcc=False,
        mandatory_documents=[DocumentType.PASSPORT],
        medical_required=True,
    ),
}


def _key(country: str) -> str:
    return country.strip().lower()


class CountryRuleBook:
    """Country name -> rule lookup with a guaranteed DEFAULT fallback."""

    def __init__(self, rules: Mapping[str, CountryRule] | None = None):
        source = COUNTRY_RULES if rules is None else rules
        # Case-insensitive keys; callers pass free-text country names.
        self._rules = {_key(name): rule for name, rule in source.items()}
        self._rules.setdefault(_DEFAULT_KEY, COUNTRY_RULES[DEFAULT_RULE_KEY])

    @property
    def default(self) -> CountryRule:
        return self._rules[_DEFAULT_KEY]

    def get(self, country: str | None) -> CountryRule:
        """Return the rule for ``country``, or DEFAULT when unknown or blank."""
        if not country:
            return self.default
        rule = self._rules.get(_key(country))
        if rule is None:
            logger.warning("No country rule for %r, using DEFAULT", country)
            return self.default
        return rule

    def __contains__(self, country: object) -> bool:
        """True when ``country`` has its own rule (the DEFAULT fallback does not count)."""
        if not isinstance(country, str):
            return False
        key = _key(country)
        return key != _DEFAULT_KEY and key in self._rules

    def countries(self) -> list[str]:
        return sorted(rule.country_name for key, rule in self._rules.items() if key != _DEFAULT_KEY)


def load_country_rules(path: Path) -> CountryRuleBook:
    """Load a country rule table from YAML.

    Raises FileNotFoundError, yaml.YAMLError or pydantic.ValidationError on
    a bad file; startup should fail rather than run with half a rule set.
    """
    if not path.exists():
        raise FileNotFoundError(f"Country rules file not found: {path}")
    raw = yaml.safe_load(path.read_text()) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Country rules file must map country names to rules: {path}")

    rules: dict[str, CountryRule] = {}
    for name, body in raw.items():
        body = dict(body or {})
        body.setdefault("country_name", name)
        rules[str(name)] = CountryRule.model_validate(body)

    if _DEFAULT_KEY not in {_key(name) for name in rules}:
        logger.warning("Country rules file %s has no DEFAULT entry, using built-in", path)
    logger.info("Loaded %d country rules from %s", len(rules), path)
    return CountryRuleBook(rules)
