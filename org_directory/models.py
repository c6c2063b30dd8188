from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional
from pydantic import BaseModel, ConfigDict, Field

from .rules import UNKNOWN, UNNAMED_ORGANIZATION


class RawRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    fields: Dict[str, Any] = Field(default_factory=dict)


# collection key -> record id -> linked record fields
ReferenceTable = Mapping[str, Mapping[str, Mapping[str, Any]]]


class Location(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: Any = ""
    city: Any = ""
    state_region: Any = ""
    country: Any = ""
    zip_postal_code: Any = ""


class FundingInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    funding_sources: List[Any] = Field(default_factory=list)
    revenue: Any = UNKNOWN


class TokenInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    token_name: Any = ""
    token_symbol: Any = ""
    blockchain_platform: Any = ""
    governance_mechanism: Any = ""
    link_to_token_contract: Any = ""


class ContactInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    contact_person: Any = ""
    email: Any = ""
    phone: Any = ""


class SocialLinks(BaseModel):
    model_config = ConfigDict(frozen=True)

    website: Any = ""
    twitter: Any = ""
    linkedin: Any = ""
    discord: Any = ""
    github: Any = ""


class Organization(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Any
    name: Any = Field(default=UNNAMED_ORGANIZATION, examples=["Acme Worker Cooperative"])
    description: Any = None
    type_of_organization: Any = None
    industry: Any = None
    ownership_structure: List[Any] = Field(default_factory=list)
    legal_structure: Any = None
    year_founded: Any = None
    headquarters_location: Location = Field(default_factory=Location)
    geographical_scope: Any = None
    size: Any = None
    number_of_owners_members: Any = None
    funding_financial_information: FundingInfo = Field(default_factory=FundingInfo)
    token_information: Optional[TokenInfo] = None
    governance_model: Any = None
    links_social_media: SocialLinks = Field(default_factory=SocialLinks)
    contact_information: ContactInfo = Field(default_factory=ContactInfo)
    certifications_affiliations: List[Any] = Field(default_factory=list)
    tags: List[Any] = Field(default_factory=list)
    date_added_to_directory: Any = None
    last_updated: Any = None


class ErrorResponse(BaseModel):
    error: str
    details: str


class HealthResponse(BaseModel):
    ok: bool = True
