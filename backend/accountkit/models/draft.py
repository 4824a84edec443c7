from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# Persisted form fields. Password fields are never persisted.
DRAFT_FIELDS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "email": "email",
    "phoneNumber": "phone_number",
    "country": "country",
    "agreeToTerms": "agree_to_terms",
}


@dataclass
class RegistrationDraft:
    """Partial, non-sensitive snapshot of an in-progress registration form"""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    country: Optional[str] = None
    agree_to_terms: Optional[bool] = None
    last_updated: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage, omitting unset fields"""
        data = {
            form_name: getattr(self, attr)
            for form_name, attr in DRAFT_FIELDS.items()
            if getattr(self, attr) is not None
        }
        data["lastUpdated"] = self.last_updated.isoformat()
        return data

    @classmethod
    def from_form(cls, form: Dict[str, Any], now: Optional[datetime] = None) -> "RegistrationDraft":
        """Build a draft from raw form data, dropping secrets and unknown fields"""
        values = {
            attr: form[form_name]
            for form_name, attr in DRAFT_FIELDS.items()
            if form.get(form_name) is not None
        }
        return cls(last_updated=now or datetime.now(timezone.utc), **values)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RegistrationDraft":
        """Create RegistrationDraft from a stored record"""
        last_updated = data.get("lastUpdated")
        draft = cls.from_form(data)
        if last_updated:
            draft.last_updated = datetime.fromisoformat(last_updated)
        return draft
