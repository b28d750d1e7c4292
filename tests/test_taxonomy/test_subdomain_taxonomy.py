"""Tests for subdomain taxonomy integrity — SUBDOMAIN_RULES contract."""

from __future__ import annotations

from stack_advisor.taxonomy.subdomain_taxonomy import SUBDOMAIN_RULES, Subdomain, SubdomainRule


class TestSubdomainEnum:
    def test_no_duplicate_values(self):
        values = [m.value for m in Subdomain]
        assert len(values) == len(set(values)), "Subdomain has duplicate values"

    def test_all_values_non_empty(self):
        for member in Subdomain:
            assert member.value.strip()


class TestSubdomainRules:
    def test_declared_order(self):
        assert [str(r.label) for r in SUBDOMAIN_RULES] == [
            "Email Marketing",
            "CRM",
            "Marketing Automation",
            "Customer Support",
            "Analytics",
            "Chat/Messaging",
            "CMS",
            "Advertising",
        ]

    def test_every_subdomain_has_one_rule(self):
        labels = [r.label for r in SUBDOMAIN_RULES]
        assert sorted(labels) == sorted(Subdomain)
        assert len(labels) == len(set(labels))

    def test_keywords_are_lowercase_and_non_empty(self):
        for rule in SUBDOMAIN_RULES:
            assert rule.keywords, f"{rule.label} has no keywords"
            for keyword in rule.keywords:
                assert keyword and keyword == keyword.lower(), (
                    f"{rule.label}: keyword '{keyword}' must be lower-case"
                )

    def test_rules_are_immutable(self):
        assert isinstance(SUBDOMAIN_RULES, tuple)
        assert all(isinstance(r.keywords, tuple) for r in SUBDOMAIN_RULES)


class TestSubdomainRuleMatches:
    def test_substring_match(self):
        rule = SubdomainRule("CMS", ("cms", "website builder"))
        assert rule.matches("wix website builder")
        assert rule.matches("headless cms")

    def test_no_match(self):
        rule = SubdomainRule("CMS", ("cms",))
        assert not rule.matches("analytics suite")
