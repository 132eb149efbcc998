from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from fittrack.db import commit, get_db
from fittrack.models.exercise_template import ExerciseTemplate
from fittrack.schemas.exercise import TemplateCreate, TemplateRead

router = APIRouter(prefix="/templates", tags=["templates"])


@router.get("/", response_model=list[TemplateRead])
def list_templates(name: Optional[str] = Query(None), db: Session = Depends(get_db)):
    """Templates, most recently used first; `name` narrows to an exact match."""
    query = db.query(ExerciseTemplate)
    if name is not None:
        query = query.filter(ExerciseTemplate.name == name)
    return query.order_by(ExerciseTemplate.last_used_date.desc(), ExerciseTemplate.id.desc()).all()


@router.post("/", response_model=TemplateRead)
def create_template(payload: TemplateCreate, db: Session = Depends(get_db)):
    if db.query(ExerciseTemplate).filter(ExerciseTemplate.name == payload.name).first():
        raise HTTPException(status_code=409, detail="Template already exists")
    template = ExerciseTemplate(name=payload.name, category=payload.category)
    db.add(template)
    commit(db)
    db.refresh(template)
    return template


@router.get("/{template_id}", response_model=TemplateRead)
def get_template(template_id: int, db: Session = Depends(get_db)):
    template = db.get(ExerciseTemplate, template_id)
    if template is None:
        raise HTTPException(status_code=404, detail="Template not found")
    return template
