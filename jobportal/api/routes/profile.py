from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobportal.core.auth_dependency import Caller, get_current_caller, get_db
from jobportal.schemas.user import ProfileEnvelope, ProfileMutationResponse, ProfileResponse, ProfileUpdate
from jobportal.services.profile_service import get_profile, save_profile

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("", response_model=ProfileEnvelope)
def read_profile(caller: Caller = Depends(get_current_caller), db: Session = Depends(get_db)):
    profile = get_profile(db, caller)
    if profile is None:
        return ProfileEnvelope(exists=False)
    return ProfileEnvelope(exists=True, profile=ProfileResponse.model_validate(profile))


@router.put("", response_model=ProfileMutationResponse)
def put_profile(
    payload: ProfileUpdate,
    caller: Caller = Depends(get_current_caller),
    db: Session = Depends(get_db),
):
    existed = get_profile(db, caller) is not None
    profile = save_profile(db, caller, payload.model_dump(exclude_unset=True))
    return ProfileMutationResponse(
        message="Profile updated successfully" if existed else "Profile created successfully",
        profile=ProfileResponse.model_validate(profile),
    )
