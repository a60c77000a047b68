"""schema.org JSON-LD builders embedded in page responses."""
from typing import Optional
from urllib.parse import quote

SITE_NAME = "QASkills.sh"
SITE_DESCRIPTION = "The curated QA skills directory for AI coding agents"
AUTHOR = {
    "@type": "Person",
    "name": "Pramod Dutta",
    "url": "https://youtube.com/@TheTestingAcademy",
}


def _logo(base_url: str) -> dict:
    return {"@type": "ImageObject", "url": f"{base_url}/logo.png", "width": 512, "height": 512}


def _publisher(base_url: str) -> dict:
    return {"@type": "Organization", "name": SITE_NAME, "url": base_url, "logo": _logo(base_url)}


def website(base_url: str) -> dict:
    return {
        "@context": "https://schema.org",
        "@type": "WebSite",
        "name": SITE_NAME,
        "url": base_url,
        "description": SITE_DESCRIPTION,
        "potentialAction": {
            "@type": "SearchAction",
            "target": f"{base_url}/skills?q={{search_term_string}}",
            "query-input": "required name=search_term_string",
        },
    }


def organization(base_url: str) -> dict:
    return {
        "@context": "https://schema.org",
        "@type": "Organization",
        "name": "The Testing Academy",
        "url": base_url,
        "logo": _logo(base_url),
        "founder": AUTHOR,
        "sameAs": [
            "https://youtube.com/@TheTestingAcademy",
            "https://github.com/PramodDutta/qaskills",
        ],
    }


def skill(base_url: str,
    name: str,
    description: str,
    author: str,
    slug: str,
    review_count: int = 0,
    average_rating: Optional[float] = None,
    version: Optional[str] = None,
) -> dict:
    """SoftwareApplication entry for a skill detail page"""
    data = {
        "@context": "https://schema.org",
        "@type": "SoftwareApplication",
        "name": name,
        "description": description,
        "image": f"{base_url}/api/og?title={quote(name, safe='')}&description={quote(description, safe='')}&type=skill",
        "author": {"@type": "Organization", "name": author},
        "applicationCategory": "DeveloperApplication",
        "operatingSystem": "Any",
        "offers": {
            "@type": "Offer",
            "price": "0",
            "priceCurrency": "USD",
            "availability": "https://schema.org/InStock",
        },
    }
    if review_count and review_count > 0 and average_rating:
        data["aggregateRating"] = {
            "@type": "AggregateRating",
            "ratingValue": f"{average_rating:.1f}",
            "bestRating": "5",
            "ratingCount": review_count,
        }
    if version:
        data["softwareVersion"] = version
    data["url"] = f"{base_url}/skills/{author}/{slug}"
    return data


def blog_post(base_url: str,
    title: str,
    description: str,
    date: str,
    slug: str,
    date_modified: Optional[str] = None,
    image: Optional[str] = None,
) -> dict:
    url = f"{base_url}/blog/{slug}"
    data = {
        "@context": "https://schema.org",
        "@type": "BlogPosting",
        "headline": title,
        "description": description,
        "datePublished": date,
        "dateModified": date_modified or date,
    }
    if image:
        data["image"] = image
    data.update({
        "author": AUTHOR,
        "publisher": _publisher(base_url),
        "url": url,
        "mainEntityOfPage": url,
    })
    return data


def breadcrumbs(items: list[tuple[str, str]]) -> dict:
    """items: (name, url) pairs from the root down."""
    return {
        "@context": "https://schema.org",
        "@type": "BreadcrumbList",
        "itemListElement": [
            {"@type": "ListItem", "position": position, "name": name, "item": url}
            for position, (name, url) in enumerate(items, start=1)
        ],
    }


def collection_page(name: str, description: str, url: str, items: Optional[list[tuple[str, str]]] = None) -> dict:
    data = {
        "@context": "https://schema.org",
        "@type": "CollectionPage",
        "name": name,
        "description": description,
        "url": url,
    }
    if items:
        data["mainEntity"] = {
            "@type": "ItemList",
            "numberOfItems": len(items),
            "itemListElement": [
                {"@type": "ListItem", "position": position, "name": item_name, "url": item_url}
                for position, (item_name, item_url) in enumerate(items, start=1)
            ],
        }
    return data
