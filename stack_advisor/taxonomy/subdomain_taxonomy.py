"""
Functional subdomain taxonomy used for overlap detection.

A subdomain is a finer-grained label than a lane ("Email Marketing" rather
than "Marketing").  Tools are classified by matching keywords against their
lower-cased name, category and description.

``SUBDOMAIN_RULES`` is the canonical ordered table.  Order is part of the
contract: the first rule whose keywords match wins, so a tool described with
both email and CRM vocabulary lands in ``EMAIL_MARKETING`` because that rule
is declared first.

Run ``tests/test_taxonomy/test_subdomain_taxonomy.py`` to verify the table.

This module has NO imports from any other ``stack_advisor`` package.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Subdomain(StrEnum):
    """Canonical subdomain labels."""

    EMAIL_MARKETING = "Email Marketing"
    """Newsletters, campaign mailers, email service providers."""

    CRM = "CRM"
    """Customer relationship management and sales pipelines."""

    MARKETING_AUTOMATION = "Marketing Automation"
    """Workflow, journey and nurture automation."""

    CUSTOMER_SUPPORT = "Customer Support"
    """Helpdesks, ticketing, service desks."""

    ANALYTICS = "Analytics"
    """Product and web analytics, reporting, tracking."""

    CHAT_MESSAGING = "Chat/Messaging"
    """Live chat and in-app messaging."""

    CMS = "CMS"
    """Content management and website builders."""

    ADVERTISING = "Advertising"
    """Ad platforms and campaign managers."""


@dataclass(frozen=True)
class SubdomainRule:
    """One row of the classification table.

    Attributes:
        label:    Subdomain returned when the rule matches.
        keywords: Lower-case substrings; any one of them matching is enough.
    """

    label: str
    keywords: tuple[str, ...]

    def matches(self, text: str) -> bool:
        """True if any keyword is a substring of ``text`` (already lower-cased)."""
        return any(keyword in text for keyword in self.keywords)


SUBDOMAIN_RULES: tuple[SubdomainRule, ...] = (
    SubdomainRule(
        Subdomain.EMAIL_MARKETING,
        ("email", "newsletter", "mailchimp", "klaviyo", "campaign", "mailer", "hubspot"),
    ),
    SubdomainRule(
        Subdomain.CRM,
        ("crm", "customer relationship", "salesforce", "pipedrive"),
    ),
    SubdomainRule(
        Subdomain.MARKETING_AUTOMATION,
        ("marketing automation", "automation", "workflow", "journey", "nurture"),
    ),
    SubdomainRule(
        Subdomain.CUSTOMER_SUPPORT,
        ("support", "helpdesk", "help desk", "ticket", "zendesk", "service desk"),
    ),
    SubdomainRule(
        Subdomain.ANALYTICS,
        ("analytics", "reporting", "tracking", "amplitude", "mixpanel", "ga4", "google analytics"),
    ),
    SubdomainRule(
        Subdomain.CHAT_MESSAGING,
        ("chat", "messaging", "live chat", "intercom", "drift"),
    ),
    SubdomainRule(
        Subdomain.CMS,
        ("cms", "content management", "website builder"),
    ),
    SubdomainRule(
        Subdomain.ADVERTISING,
        ("ads", "advertising", "ad platform", "campaign manager"),
    ),
)
