from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from api.schemas.content import (
    DeleteResponse,
    FeaturedProgramRequest,
    FeaturedProgramResponse,
    FeaturedProgramUpdateRequest,
    NewsRequest,
    NewsResponse,
    NewsUpdateRequest,
    ServiceRequest,
    ServiceResponse,
    ServiceUpdateRequest,
)
from db.database import get_db
from db import content_crud

router = APIRouter()


# Services ("Layanan Kami")


@router.post("/services", status_code=201, response_model=ServiceResponse, tags=["services"])
def create_service(payload: ServiceRequest, db: Session = Depends(get_db)):
    return content_crud.create_service(db, payload)


@router.get("/services", response_model=List[ServiceResponse], tags=["services"])
def get_services(db: Session = Depends(get_db)):
    return content_crud.get_services(db)


@router.patch("/services/{service_id}", response_model=ServiceResponse, tags=["services"])
def update_service(service_id: int, payload: ServiceUpdateRequest, db: Session = Depends(get_db)):
    service = content_crud.update_service(db, service_id, payload)
    if not service:
        raise HTTPException(status_code=404, detail="Service not found")
    return service


@router.delete("/services/{service_id}", response_model=DeleteResponse, tags=["services"])
def delete_service(service_id: int, db: Session = Depends(get_db)):
    return DeleteResponse(deleted=content_crud.delete_service(db, service_id))


# Featured programs ("Program Unggulan")


@router.post("/featured-programs", status_code=201, response_model=FeaturedProgramResponse, tags=["featured-programs"])
def create_featured_program(payload: FeaturedProgramRequest, db: Session = Depends(get_db)):
    return content_crud.create_featured_program(db, payload)


@router.get("/featured-programs", response_model=List[FeaturedProgramResponse], tags=["featured-programs"])
def get_featured_programs(db: Session = Depends(get_db)):
    return content_crud.get_featured_programs(db)


@router.patch("/featured-programs/{program_id}", response_model=FeaturedProgramResponse, tags=["featured-programs"])
def update_featured_program(program_id: int, payload: FeaturedProgramUpdateRequest, db: Session = Depends(get_db)):
    program = content_crud.update_featured_program(db, program_id, payload)
    if not program:
        raise HTTPException(status_code=404, detail="Featured program not found")
    return program


@router.delete("/featured-programs/{program_id}", response_model=DeleteResponse, tags=["featured-programs"])
def delete_featured_program(program_id: int, db: Session = Depends(get_db)):
    return DeleteResponse(deleted=content_crud.delete_featured_program(db, program_id))


# News & announcements ("Berita & Pengumuman")


@router.post("/news", status_code=201, response_model=NewsResponse, tags=["news"])
def create_news(payload: NewsRequest, db: Session = Depends(get_db)):
    return content_crud.create_news(db, payload)


@router.get("/news", response_model=List[NewsResponse], tags=["news"])
def get_news(db: Session = Depends(get_db)):
    return content_crud.get_news(db)


@router.get("/news/announcements", response_model=List[NewsResponse], tags=["news"])
def get_announcements(db: Session = Depends(get_db)):
    return content_crud.get_announcements(db)


@router.patch("/news/{news_id}", response_model=NewsResponse, tags=["news"])
def update_news(news_id: int, payload: NewsUpdateRequest, db: Session = Depends(get_db)):
    news = content_crud.update_news(db, news_id, payload)
    if not news:
        raise HTTPException(status_code=404, detail="News not found")
    return news


@router.delete("/news/{news_id}", response_model=DeleteResponse, tags=["news"])
def delete_news(news_id: int, db: Session = Depends(get_db)):
    return DeleteResponse(deleted=content_crud.delete_news(db, news_id))
