"""
College email endpoints.

Backs the live check on the signup form.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from modules.colleges.interfaces import IEmailClassifier
from modules.colleges.models import EmailClassification

from ..dependencies import get_email_classifier

router = APIRouter()


class ClassifyEmailRequest(BaseModel):
    """Email classification request model."""

    email: str = ""


@router.post("/verify-email", response_model=EmailClassification)
async def classify_email(
    request: ClassifyEmailRequest,
    classifier: IEmailClassifier = Depends(get_email_classifier),
) -> EmailClassification:
    """
    Classify an email address.

    Always 200; the `status` field says whether the address is malformed,
    valid but not educational, or educational.
    """
    return classifier.classify(request.email)
