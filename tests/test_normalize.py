import pytest

from org_directory import rules
from org_directory.models import FundingInfo, Organization, RawRecord
from org_directory.normalize import (
    MISSING,
    build_contact_info,
    build_funding_info,
    build_location,
    build_social_links,
    build_token_info,
    get_field,
    normalize_record,
    parse_delimited,
)


def test_get_field_first_present_alias_wins():
    fields = {"name": "snake", "Name": "", "orgName": "camel"}

    assert get_field(fields, ["Name", "name", "orgName"]) == ""
    assert get_field(fields, ["name", "Name"]) == "snake"


def test_get_field_absent_marker():
    value = get_field({"other": 1}, ["Name", "name"])

    assert value is MISSING
    assert not value
    assert get_field({}, ["Name"], None) is None


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("a; b; c", ["a", "b", "c"]),
        ("a, b", ["a", "b"]),
        ("single", ["single"]),
        ("a;b, c", ["a", "b, c"]),
        (["a;b", "c"], ["a", "b", "c"]),
        (["x, y", "z; w, v"], ["x", "y", "z", "w, v"]),
        (["kept", 7], ["kept", 7]),
        ([["a", "b"], "c"], ["a", "b", "c"]),
        ([["a;b"], "c, d"], ["a;b", "c", "d"]),
        ([], []),
        ("", []),
        (None, []),
        (MISSING, []),
        (42, [42]),
    ],
)
def test_parse_delimited(raw, expected):
    assert parse_delimited(raw) == expected


# --- token information ---


def test_token_info_absent_without_link_field():
    assert build_token_info({"token_name": "FOO"}, {}) is None


def test_token_info_falls_back_when_link_unresolved():
    token = build_token_info({"Token Information": ["recXYZ"]}, {})

    assert token.token_name == "Unknown Token"
    assert token.blockchain_platform == "Ethereum"
    assert token.governance_mechanism == "Unknown"
    assert token.token_symbol == ""
    assert token.link_to_token_contract == ""


def test_token_info_fallback_uses_governance_model():
    fields = {
        "tokenInformation": ["recXYZ"],
        "tokenName": "Coop Coin",
        "token_symbol": "COOP",
        "Governance Model": "Sociocracy",
    }

    token = build_token_info(fields, {})

    assert token.token_name == "Coop Coin"
    assert token.token_symbol == "COOP"
    assert token.governance_mechanism == "Sociocracy"


def test_token_info_from_linked_record():
    references = {
        "tokeninformation": {
            "recT1": {"tokenName": "Gov", "token_symbol": "", "tokenSymbol": "GOV", "blockchain_platform": "Gnosis"},
        }
    }

    token = build_token_info({"Token Information": ["recT1"], "token_name": "ignored"}, references)

    assert token.token_name == "Gov"
    assert token.token_symbol == "GOV"
    assert token.blockchain_platform == "Gnosis"
    assert token.governance_mechanism == ""


def test_token_info_found_but_empty_is_not_a_fallback():
    token = build_token_info({"Token Information": ["recT1"]}, {"tokeninformation": {"recT1": {}}})

    assert token.token_name == ""
    assert token.blockchain_platform == ""


# --- funding ---


def test_funding_defaults_without_any_fields():
    funding = build_funding_info({}, {})

    assert funding.funding_sources == []
    assert funding.revenue == "Unknown"


def test_funding_falls_back_when_link_unresolved():
    fields = {"Funding & Financial Information": ["recGone"], "revenue": "5M"}

    funding = build_funding_info(fields, {"funding": {"recOther": {"revenue": "1M"}}})

    assert funding.revenue == "5M"
    assert funding.funding_sources == []


def test_funding_probes_keys_in_order():
    fields = {"funding_financial_information": ["recF1"]}
    references = {
        "financial": {"recF1": {"Revenue": "last"}},
        "funding": {"recF1": {"fundingSources": "Grants; Member dues", "Revenue": "2M"}},
    }

    funding = build_funding_info(fields, references)

    assert funding.funding_sources == ["Grants", "Member dues"]
    assert funding.revenue == "2M"


# --- contact, links, location ---


def test_contact_defaults_to_empty_strings():
    contact = build_contact_info({}, {})

    assert contact.model_dump() == {"contact_person": "", "email": "", "phone": ""}


def test_contact_from_linked_record():
    references = {"contactinformation": {"recC1": {"contactPerson": "Ana", "Email": "ana@example.org"}}}

    contact = build_contact_info({"Contact Information": ["recC1"], "email": "flat@example.org"}, references)

    assert contact.contact_person == "Ana"
    assert contact.email == "ana@example.org"
    assert contact.phone == ""


def test_social_links_fallback_aliases():
    links = build_social_links({"Website": "https://coop.example", "linkdeIn": "li/coop", "GitHub": "gh/coop"}, {})

    assert links.website == "https://coop.example"
    assert links.linkedin == "li/coop"
    assert links.github == "gh/coop"
    assert links.twitter == ""


def test_social_links_linked_under_alternate_key():
    references = {"socialmedia": {"recL1": {"Twitter": "@coop"}}}

    links = build_social_links({"links_social_media": ["recL1"]}, references)

    assert links.twitter == "@coop"


def test_location_uses_first_linked_id_only():
    references = {
        "table2": {
            "recH1": {"City": "Mondragón", "State/Region": "Gipuzkoa"},
            "recH2": {"City": "Elsewhere"},
        }
    }

    location = build_location({"Headquarters Location": ["recH1", "recH2"]}, references)

    assert location.city == "Mondragón"
    assert location.state_region == "Gipuzkoa"
    assert location.country == ""


def test_location_non_list_link_uses_flat_fields():
    location = build_location({"headquarters": "recH1", "city": "Porto"}, {"headquarters": {"recH1": {"city": "X"}}})

    assert location.city == "Porto"


# --- assembly ---


def test_normalize_record_assembles_organization():
    record = RawRecord(
        id="recOrg1",
        fields={
            "Name": "Acme Cooperative",
            "Description": "Worker-owned bakery",
            "Type of Organization": "Cooperative",
            "yearFounded": 1998,
            "Ownership Structure": ["Worker-owned; Community", "Member"],
            "Tags": "coop; worker-owned",
            "certificationsAffiliations": "B Corp, Fair Trade",
            "Number of Owners/Members": 42,
            "Last Updated": "2024-03-01",
        },
    )

    org = normalize_record(record, {})

    assert org.id == "recOrg1"
    assert org.name == "Acme Cooperative"
    assert org.description == "Worker-owned bakery"
    assert org.type_of_organization == "Cooperative"
    assert org.year_founded == 1998
    assert org.number_of_owners_members == 42
    assert org.ownership_structure == ["Worker-owned", "Community", "Member"]
    assert org.tags == ["coop", "worker-owned"]
    assert org.certifications_affiliations == ["B Corp", "Fair Trade"]
    assert org.last_updated == "2024-03-01"
    assert org.industry is None
    assert org.token_information is None
    assert org.funding_financial_information.revenue == "Unknown"
    assert org.headquarters_location.city == ""


def test_normalize_record_prefers_explicit_id_and_placeholder_name():
    org = normalize_record(RawRecord(id="recOrg9", fields={"ID": "org-9"}), {})

    assert org.id == "org-9"
    assert org.name == "Unnamed Organization"
    assert org.tags == []
    assert org.ownership_structure == []


def test_normalize_record_is_idempotent():
    record = RawRecord(
        id="recOrg1",
        fields={"Name": "Twice", "Contact Information": ["recC1"], "Tags": ["a;b"]},
    )
    references = {"contactinformation": {"recC1": {"email": "x@example.org"}}}

    assert normalize_record(record, references) == normalize_record(record, references)
    assert normalize_record(record, references).model_dump() == normalize_record(record, references).model_dump()


def test_organization_json_shape():
    org = normalize_record(RawRecord(id="recOrg1", fields={}), {})

    assert list(org.model_dump()) == [
        "id",
        "name",
        "description",
        "type_of_organization",
        "industry",
        "ownership_structure",
        "legal_structure",
        "year_founded",
        "headquarters_location",
        "geographical_scope",
        "size",
        "number_of_owners_members",
        "funding_financial_information",
        "token_information",
        "governance_model",
        "links_social_media",
        "contact_information",
        "certifications_affiliations",
        "tags",
        "date_added_to_directory",
        "last_updated",
    ]


def test_funding_sources_list_elements_kept_whole():
    references = {"funding": {"recF1": {"funding_sources": ["Grants, loans", "Member dues"]}}}

    linked = build_funding_info({"funding_financial_information": ["recF1"]}, references)
    flat = build_funding_info({"fundingSources": ["Grants, loans"], "revenue": "5M"}, {})

    assert linked.funding_sources == ["Grants, loans", "Member dues"]
    assert flat.funding_sources == ["Grants, loans"]
    assert flat.revenue == "5M"


def test_model_defaults_follow_rules():
    assert FundingInfo().revenue == rules.UNKNOWN
    assert Organization(id="recOrg1").name == rules.UNNAMED_ORGANIZATION
