"""
Static normalization rules for directory records.

Field names in the source base are inconsistent ("Name" vs "name" vs
"orgName"). Each logical field declares its aliases here in precedence order:
human-readable label first, then snake_case, then camelCase.

Linked tables are never declared by the source API, so the collection a link
points at is guessed from the field name. The candidate keys probed for each
sub-record are listed here so the guess stays visible.
"""

from __future__ import annotations

from typing import Dict, Tuple

REFERENCE_ID_PREFIX = "rec"

UNNAMED_ORGANIZATION = "Unnamed Organization"
UNKNOWN = "Unknown"
UNKNOWN_TOKEN = "Unknown Token"
DEFAULT_BLOCKCHAIN = "Ethereum"

Aliases = Tuple[str, ...]

# --- Organization scalars ---

SCALAR_ALIASES: Dict[str, Aliases] = {
    "id": ("id", "ID"),
    "name": ("Name", "name"),
    "description": ("Description", "description"),
    "type_of_organization": ("Type of Organization", "type_of_organization", "typeOfOrganization"),
    "industry": ("Industry", "industry"),
    "legal_structure": ("Legal Structure", "legal_structure", "legalStructure"),
    "year_founded": ("Year Founded", "year_founded", "yearFounded"),
    "geographical_scope": ("Geographical Scope", "geographical_scope", "geographicalScope"),
    "size": ("Size", "size"),
    "number_of_owners_members": (
        "Number of Owners/Members",
        "number_of_owners_members",
        "numberOfOwnersMembers",
    ),
    "governance_model": ("Governance Model", "governance_model", "governanceModel"),
    "date_added_to_directory": ("Date Added to Directory", "date_added", "dateAddedToDirectory"),
    "last_updated": ("Last Updated", "last_update", "lastUpdated"),
}

# --- Delimited list fields ---

LIST_ALIASES: Dict[str, Aliases] = {
    "ownership_structure": ("Ownership Structure", "ownership_structure", "ownershipStructure"),
    "tags": ("Tags", "tags"),
    "certifications_affiliations": (
        "Certifications & Affiliations",
        "certifications_affiliations",
        "certificationsAffiliations",
    ),
}

# --- Link fields and the collection keys probed for each ---

LINK_ALIASES: Dict[str, Aliases] = {
    "token_information": ("Token Information", "token_information", "tokenInformation"),
    "funding_financial_information": (
        "Funding & Financial Information",
        "funding_and_financial_information",
        "fundingAndFinancialInformation",
        "funding_financial_information",
    ),
    "contact_information": ("Contact Information", "contact_information", "contactInformation"),
    "links_social_media": (
        "Links/Social Media",
        "Links_social_media",
        "links_social_media",
        "linksSocialMedia",
    ),
    "headquarters_location": ("Headquarters Location", "headquarters", "headquartersLocation"),
}

COLLECTION_KEYS: Dict[str, Aliases] = {
    "token_information": ("tokeninformation",),
    "funding_financial_information": (
        "fundingandfinancialinformation",
        "fundingfinancialinformation",
        "funding",
        "financial",
    ),
    "contact_information": ("contactinformation",),
    "links_social_media": ("linkssocialmedia", "links", "socialmedia"),
    # "table2" is the default name of an unrenamed second table.
    "headquarters_location": ("headquarters", "headquarterslocation", "table2"),
}

# --- Sub-record fields ---
# Same aliases are used on the linked record and, as fallback, on the
# organization's own record unless a *_FALLBACK override exists.

TOKEN_FIELDS: Dict[str, Aliases] = {
    "token_name": ("token_name", "tokenName"),
    "token_symbol": ("token_symbol", "tokenSymbol"),
    "blockchain_platform": ("blockchain_platform", "blockchainPlatform"),
    "governance_mechanism": ("governance_mechanism", "governanceMechanism"),
    "link_to_token_contract": ("link_to_token_contract", "linkToTokenContract"),
}

# Without a linked token record the organization's governance model stands in
# for the token's governance mechanism.
TOKEN_FALLBACK_FIELDS: Dict[str, Aliases] = {
    **TOKEN_FIELDS,
    "governance_mechanism": ("Governance Model", "governance_model"),
}

TOKEN_FALLBACK_DEFAULTS: Dict[str, str] = {
    "token_name": UNKNOWN_TOKEN,
    "blockchain_platform": DEFAULT_BLOCKCHAIN,
    "governance_mechanism": UNKNOWN,
}

FUNDING_SOURCES_ALIASES: Aliases = ("funding_sources", "fundingSources")
REVENUE_ALIASES: Aliases = ("revenue", "Revenue")

CONTACT_FIELDS: Dict[str, Aliases] = {
    "contact_person": ("contact_person", "contactPerson"),
    "email": ("email", "Email"),
    "phone": ("phone", "Phone"),
}

# "linkdeIn" is a misspelt column that exists in the live base.
LINK_FIELDS: Dict[str, Aliases] = {
    "website": ("website", "Website"),
    "twitter": ("twitter", "Twitter"),
    "linkedin": ("linkedin", "LinkedIn", "linkdeIn"),
    "discord": ("discord", "Discord"),
    "github": ("github", "Github", "GitHub"),
}

LOCATION_FIELDS: Dict[str, Aliases] = {
    "address": ("address", "Address"),
    "city": ("city", "City"),
    "state_region": ("state_region", "stateRegion", "State/Region"),
    "country": ("country", "Country"),
    "zip_postal_code": ("zip_postal_code", "zipPostalCode", "Zip/Postal Code"),
}

LIST_DELIMITERS: Tuple[str, ...] = (";", ",")
