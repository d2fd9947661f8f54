"""
Compiled-in default content served until the admin saves real data.
"""

from __future__ import annotations

PARTNER_SEEDS = [
    {
        "id": "zenex",
        "name": "Zenex",
        "website": "https://zenexah.com",
        "logo": "/images/partners/zenex.png",
        "products": [
            "Stresroak premix",
            "Stresroak liquid",
            "Superliv liquid",
            "AyucalD premix",
            "Ayucal liquid",
        ],
    },
    {
        "id": "anpario",
        "name": "Anpario",
        "website": "https://www.anpario.com",
        "logo": "/images/partners/anpario.png",
        "products": [
            "Anpro UB",
            "Anpro",
            "Salgard liquid",
            "Genex poultry",
            "Zetox",
            "Orego stim powder",
            "Orego stim liquid",
        ],
    },
    {
        "id": "boehringer-ingelheim",
        "name": "Boehringer Ingelheim",
        "website": "https://www.boehringer-ingelheim.com/animal-health",
        "logo": "/images/partners/bi.png",
        "products": [
            "BEST AI+ ND",
            "Bioluze",
            "VOLVAC ND LASOTA MLV",
            "Vaxx HVT+ IBD",
            "Volvac ND+IB+EDS KV",
            "Bar Vac 10",
            "Volvac ND coc",
            "Volvac IBD MLV GUMBORO",
            "Diftosec",
            "Gallivac IB88 NEO (DS 1000)",
            "Gallivac IB88 NEO (DS 2000)",
            "Bioral H120 NEO",
            "Avinew NEO",
            "Gallivac IBD S706 NEO",
            "IMopest",
            "Gallimune H9+ND",
            "Gallimune 201",
        ],
    },
    {
        "id": "sanzyme",
        "name": "Sanzyme",
        "logo": "/images/partners/sanzyme.png",
        "products": ["Sporich Total 8B", "Prome Max 8B"],
    },
    {
        "id": "alestesharia",
        "name": "Alestesharia for Poultry & Feed",
        "website": "https://www.alestesharia.com.jo",
        "logo": "/images/partners/alestesharia.png",
        "products": [
            "Layer Production Premix 1.5%",
            "Breeder Production Premix",
            "Broiler Starter Premix",
            "Broiler Grower Premix 2.5%",
        ],
    },
    {
        "id": "vemo",
        "name": "Vemo",
        "website": "https://vemo-feedadditives.com/en",
        "logo": "/images/partners/vemo.png",
        "products": [
            "Vemozyme P",
            "Vemozyme R",
            "Vemozyme 50F",
            "Vemozyme 50",
            "Vemozyme F5000 NTP",
        ],
    },
]


def default_partners() -> list[dict]:
    partners = []
    for seed in PARTNER_SEEDS:
        partner = {"id": seed["id"], "name": seed["name"], "logo": seed["logo"]}
        if seed.get("website"):
            partner["website"] = seed["website"]
        partners.append(partner)
    return partners


def default_products() -> list[dict]:
    products = []
    for seed in PARTNER_SEEDS:
        for idx, name in enumerate(seed["products"]):
            product = {
                "id": f"{seed['id']}-{idx}",
                "name": name,
                "partner": seed["name"],
                "description": "",
                "status": "available",
            }
            if seed.get("website"):
                product["origin"] = seed["website"]
            products.append(product)
    return products


def default_profile() -> dict:
    return {"name": "", "title": "", "summary": ""}


def default_settings() -> dict:
    return {
        "siteName": "VetcareSyria",
        "siteDescription": "Trusted veterinary medicines, vaccines, and feed additives.",
        "heroNote": "Since 2005 • Damascus, Syria",
        "primaryCta": "Contact us",
        "siteLanguage": "en",
        "customTheme": "default",
        "maxItemsPerPage": 10,
        "enableDarkMode": True,
        "enablePublicProfile": True,
        "enableSEO": True,
        "maintenanceMode": False,
    }


def default_contact() -> dict:
    return {
        "email": "vetcaresyria@scs-net.org",
        "emailSecondary": "vetcaresyria@gmail.com",
        "phone": "00963-11-5852338",
        "phoneAlt": "00963-11-5852339",
        "fax": "00963-11-5852340",
        "location": (
            "Syria, Damascus suburb, Adra industrial city, chemical zone, "
            "building No 710"
        ),
        "poBox": "8446, Damascus, Syria",
        "website": "www.vetcaresyria.com",
        "linkedinUrl": "",
        "facebookUrl": "",
        "instagramUrl": "",
        "twitterUrl": "",
        "showContactForm": True,
        "emailNotifications": True,
    }


def empty_list() -> list:
    return []
