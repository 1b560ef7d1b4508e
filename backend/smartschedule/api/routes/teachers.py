from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from smartschedule.api.deps import get_current_user, get_db, require_admin, require_teacher
from smartschedule.core.exceptions import ResourceNotFoundError
from smartschedule.models.user import User, UserRole
from smartschedule.schemas.user import TeacherOut, TeacherUpdate
from smartschedule.services.teachers import (
    DuplicateEmailError,
    delete_teacher,
    get_teacher,
    list_teachers,
    update_teacher_profile,
)

router = APIRouter()


@router.get("/", response_model=list[TeacherOut])
def list_all_teachers(
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> list[TeacherOut]:
    return list_teachers(db)


@router.get("/me", response_model=TeacherOut)
def get_my_profile(current_user: User = Depends(require_teacher)) -> TeacherOut:
    return current_user


@router.put("/{teacher_id}", response_model=TeacherOut)
def update_teacher(
    teacher_id: str,
    payload: TeacherUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> TeacherOut:
    if current_user.role != UserRole.admin and current_user.id != teacher_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
    teacher = get_teacher(db, teacher_id)
    if teacher is None:
        raise ResourceNotFoundError("Teacher", teacher_id)
    try:
        update_teacher_profile(db, teacher, payload)
    except DuplicateEmailError as exc:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered") from exc
    db.commit()
    db.refresh(teacher)
    return teacher


@router.delete("/{teacher_id}")
def remove_teacher(
    teacher_id: str,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db),
) -> dict:
    teacher = get_teacher(db, teacher_id)
    if teacher is None:
        raise ResourceNotFoundError("Teacher", teacher_id)
    unassigned = delete_teacher(db, teacher)
    db.commit()
    return {"success": True, "unassigned_lectures": unassigned}
