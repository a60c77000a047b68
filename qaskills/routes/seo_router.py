from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse, Response
from qaskills.handlers.dependency_handler import get_seo_service
from qaskills.services.seo_service import SeoService

router = APIRouter(tags=["seo"])

@router.get("/robots.txt", response_class=PlainTextResponse)
async def robots(seo_service: SeoService = Depends(get_seo_service)):
    return seo_service.robots_txt()

@router.get("/sitemap.xml")
async def sitemap(seo_service: SeoService = Depends(get_seo_service)):
    return Response(content=await seo_service.sitemap_xml(), media_type="application/xml")

@router.get("/llms.txt")
async def llms_txt(seo_service: SeoService = Depends(get_seo_service)):
    return PlainTextResponse(
        seo_service.llms_txt(),
        headers={"Cache-Control": "public, max-age=86400, s-maxage=86400"},
    )

@router.get("/api/site")
async def site_metadata(seo_service: SeoService = Depends(get_seo_service)):
    """Site-wide structured data for the layout"""
    return {"jsonLd": seo_service.site_json_ld()}

@router.get("/api/blog")
async def blog_index(seo_service: SeoService = Depends(get_seo_service)):
    return {"posts": seo_service.blog_index()}
