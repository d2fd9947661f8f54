"""
Every content entity the site stores, keyed by its storage key.
"""

from __future__ import annotations

from sitecms import schemas, seeds
from sitecms.resources import Resource

PROFILE = Resource(
    name="profile",
    key="profile_data",
    label="Profile",
    schema=schemas.Profile,
    default=seeds.default_profile,
    collection=False,
)
SETTINGS = Resource(
    name="settings",
    key="site_settings",
    label="Settings",
    schema=schemas.SiteSettings,
    default=seeds.default_settings,
    collection=False,
)
# Public reads go through /api/contact/data, which hides admin-only fields.
CONTACT = Resource(
    name="contact",
    key="contact_data",
    label="Contact information",
    schema=schemas.Contact,
    default=seeds.default_contact,
    collection=False,
    public=False,
)
SKILLS = Resource(
    name="skills",
    key="skills_data",
    label="Skills",
    schema=schemas.Skill,
    default=seeds.empty_list,
)
CERTIFICATIONS = Resource(
    name="certifications",
    key="certifications_data",
    label="Certifications",
    schema=schemas.Certification,
    default=seeds.empty_list,
)
EDUCATION = Resource(
    name="education",
    key="education_data",
    label="Education",
    schema=schemas.Education,
    default=seeds.empty_list,
    variants={"certifications": CERTIFICATIONS},
)
EXPERIENCE = Resource(
    name="experience",
    key="experience_data",
    label="Experience",
    schema=schemas.Experience,
    default=seeds.empty_list,
)
ACHIEVEMENTS = Resource(
    name="achievements",
    key="achievements_data",
    label="Achievements",
    schema=schemas.Achievement,
    default=seeds.empty_list,
)
PARTNERS = Resource(
    name="partners",
    key="partners_data",
    label="Partners",
    schema=schemas.Partner,
    default=seeds.default_partners,
)
PRODUCTS = Resource(
    name="products",
    key="products_data",
    label="Products",
    schema=schemas.Product,
    default=seeds.default_products,
)
# The inbox is not a generic resource: it is filled by the public contact form
# and edited one message at a time.
MESSAGES = Resource(
    name="messages",
    key="messages_data",
    label="Messages",
    schema=schemas.Message,
    default=seeds.empty_list,
    public=False,
)

CONTENT_RESOURCES = (
    PROFILE,
    SETTINGS,
    CONTACT,
    SKILLS,
    EDUCATION,
    CERTIFICATIONS,
    EXPERIENCE,
    ACHIEVEMENTS,
    PARTNERS,
    PRODUCTS,
)
ALL_RESOURCES = CONTENT_RESOURCES + (MESSAGES,)
RESOURCES_BY_KEY = {resource.key: resource for resource in ALL_RESOURCES}
