"""
Pydantic schemas for site content and request payloads.

Content models sanitize rather than reject where they can: strings are trimmed
and clamped, flags and enums fall back to their defaults. Only missing required
fields and malformed emails are errors.
"""

import re
from typing import Annotated, Any, Optional, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    model_validator,
)
from pydantic_core import PydanticCustomError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PRODUCT_STATUSES = ("available", "out-of-stock", "coming-soon")


def _clean_text(max_length: int):
    def clean(value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, bool):
            raise ValueError("expected text")
        if isinstance(value, (int, float)):
            value = str(value)
        if not isinstance(value, str):
            raise ValueError("expected text")
        return value.strip()[:max_length]

    return clean


def Text(max_length: int):
    return Annotated[Optional[str], BeforeValidator(_clean_text(max_length))]


def RequiredText(max_length: int):
    return Annotated[
        str, BeforeValidator(_clean_text(max_length)), Field(min_length=1)
    ]


def _flag(default: bool):
    return lambda value: value if isinstance(value, bool) else default


def _bounded_int(low: int, high: int, default: int):
    def coerce(value: Any) -> int:
        if isinstance(value, bool) or value is None:
            return default
        try:
            number = int(float(value))
        except (TypeError, ValueError):
            raise ValueError("expected a number")
        return max(low, min(high, number))

    return coerce


def _item_id(value: Any) -> Any:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip():
        return value.strip()[:120]
    return None


def _text_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    cleaned = [v.strip()[:500] for v in value if isinstance(v, str)]
    return [v for v in cleaned if v][:50]


def _check_email(value: str) -> str:
    if not EMAIL_PATTERN.match(value):
        raise PydanticCustomError("content_error", "Invalid email format")
    return value


def _check_optional_email(value: Optional[str]) -> Optional[str]:
    if value:
        return _check_email(value)
    return value


def _has_text(value: Any) -> bool:
    if isinstance(value, str):
        return bool(value.strip())
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _product_status(value: Any) -> str:
    return value if value in PRODUCT_STATUSES else "available"


def _text_or(default: str, max_length: int):
    clean = _clean_text(max_length)
    return lambda value: clean(value) or default


ShortText = Text(120)
Line = Text(200)
Url = Text(300)
Note = Text(500)
Paragraph = Text(2000)
LongText = Text(5000)
Stylesheet = Text(20000)
LanguageCode = Text(10)
Token = Text(100)
Phone = Text(50)
Year = Text(20)
DateText = Text(40)
PageSize = Annotated[int, BeforeValidator(_bounded_int(1, 100, 10))]
SkillLevel = Annotated[int, BeforeValidator(_bounded_int(0, 100, 0))]
RequiredName = RequiredText(120)
RequiredTitle = RequiredText(200)
EnabledFlag = Annotated[bool, BeforeValidator(_flag(True))]
DisabledFlag = Annotated[bool, BeforeValidator(_flag(False))]
ItemId = Annotated[Optional[Union[int, str]], BeforeValidator(_item_id)]
TextList = Annotated[list[str], BeforeValidator(_text_list)]
Email = Annotated[
    str,
    BeforeValidator(_clean_text(200)),
    Field(min_length=1),
    AfterValidator(_check_email),
]
OptionalEmail = Annotated[
    Optional[str],
    BeforeValidator(_clean_text(200)),
    AfterValidator(_check_optional_email),
]


class ContentModel(BaseModel):
    """Base for stored content; unknown keys are kept untouched."""

    model_config = ConfigDict(extra="allow")


class ContentItem(ContentModel):
    id: ItemId = None


# Singletons


class SocialLinks(ContentModel):
    linkedin: Url = None
    github: Url = None
    twitter: Url = None
    website: Url = None


class Profile(ContentModel):
    name: RequiredName
    title: RequiredTitle
    summary: Paragraph = None
    photoUrl: Url = None
    headerImage: Url = None
    bio: LongText = None
    location: Line = None
    availability: Line = None
    social: Optional[SocialLinks] = None

    @model_validator(mode="before")
    @classmethod
    def require_name_and_title(cls, data: Any) -> Any:
        if isinstance(data, dict) and not (
            _has_text(data.get("name")) and _has_text(data.get("title"))
        ):
            raise PydanticCustomError("content_error", "Name and title are required")
        return data


class SiteSettings(ContentModel):
    siteName: RequiredName
    siteDescription: Note = None
    siteLanguage: LanguageCode = None
    heroNote: Line = None
    primaryCta: ShortText = None
    customTheme: Token = None
    maxItemsPerPage: PageSize = 10
    analyticsId: Token = None
    customCss: Stylesheet = None
    enableDarkMode: EnabledFlag = True
    enablePublicProfile: EnabledFlag = True
    enableSEO: EnabledFlag = True
    maintenanceMode: DisabledFlag = False


class Contact(ContentModel):
    email: Email
    emailSecondary: OptionalEmail = None
    phone: Phone = None
    phoneAlt: Phone = None
    fax: Phone = None
    location: Line = None
    poBox: ShortText = None
    website: Url = None
    linkedinUrl: Url = None
    githubUrl: Url = None
    facebookUrl: Url = None
    instagramUrl: Url = None
    twitterUrl: Url = None
    showContactForm: EnabledFlag = True
    emailNotifications: EnabledFlag = True


# Collection items


class Skill(ContentItem):
    name: RequiredName
    level: SkillLevel = 0
    category: ShortText = None
    description: Note = None


class Education(ContentItem):
    institution: RequiredTitle
    degree: Line = None
    field: Line = None
    startYear: Year = None
    endYear: Year = None
    location: Line = None
    description: Paragraph = None


class Certification(ContentItem):
    title: RequiredTitle
    organization: Line = None
    year: Year = None
    description: Paragraph = None


class Experience(ContentItem):
    organization: RequiredTitle
    position: Line = None
    period: ShortText = None
    location: Line = None
    startDate: DateText = None
    endDate: DateText = None
    current: DisabledFlag = False
    responsibilities: TextList = Field(default_factory=list)
    description: Paragraph = None


class Achievement(ContentItem):
    title: RequiredTitle
    competition: Line = None
    location: Line = None
    year: Year = None
    description: Paragraph = None


class Partner(ContentItem):
    name: RequiredName
    website: Line = None
    logo: Url = None


class Product(ContentItem):
    name: Annotated[str, BeforeValidator(_text_or("Product", 200))] = "Product"
    partner: Annotated[str, BeforeValidator(_text_or("Partner", 120))] = "Partner"
    category: ShortText = None
    description: Note = None
    origin: Line = None
    status: Annotated[str, BeforeValidator(_product_status)] = "available"


class Message(ContentItem):
    name: ShortText = None
    email: Line = None
    subject: Line = None
    message: LongText = None
    date: DateText = None
    read: DisabledFlag = False


# Request payloads


class ContactFormPayload(BaseModel):
    name: ShortText = None
    email: Line = None
    subject: Line = None
    message: LongText = None


class MessageUpdatePayload(BaseModel):
    id: ItemId = None
    read: EnabledFlag = True


class MessageDeletePayload(BaseModel):
    id: ItemId = None


class LoginPayload(BaseModel):
    email: str = ""
    password: str = ""
