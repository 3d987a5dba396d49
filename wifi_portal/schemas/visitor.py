"""
Visitor Pydantic schemas
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field


class VisitorStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"
    BLOCKED = "blocked"


class MigrationStatus(str, Enum):
    RETORNADO = "retornado"
    DEPORTADO = "deportado"
    EN_TRANSITO = "en_transito"
    POTENCIAL_MIGRANTE = "potencial_migrante"
    RESIDENTE = "residente"
    NO_APLICA = "no_aplica"


class SupportNeed(str, Enum):
    EMPLEO = "empleo"
    VIVIENDA = "vivienda"
    SALUD = "salud"
    EDUCACION = "educacion"
    LEGAL = "legal"
    PSICOSOCIAL = "psicosocial"
    NINGUNO = "ninguno"


class EmploymentInterest(str, Enum):
    AGRICULTURA = "agricultura"
    CONSTRUCCION = "construccion"
    COMERCIO = "comercio"
    SERVICIOS = "servicios"
    TECNOLOGIA = "tecnologia"
    MANUFACTURA = "manufactura"
    TURISMO = "turismo"
    EMPRENDIMIENTO = "emprendimiento"
    OTRO = "otro"


class ContactChannel(str, Enum):
    WHATSAPP = "whatsapp"
    SMS = "sms"
    LLAMADA = "llamada"
    EMAIL = "email"
    FACEBOOK = "facebook"
    PRESENCIAL = "presencial"


class ContactTime(str, Enum):
    MANANA = "manana"
    TARDE = "tarde"
    NOCHE = "noche"
    CUALQUIERA = "cualquiera"


class Location(BaseModel):
    department: Optional[str] = None
    municipality: Optional[str] = None
    community: Optional[str] = None


class JobOpportunity(BaseModel):
    jobId: str
    applied: bool = False
    status: Optional[str] = None
    notes: Optional[str] = None


class VisitorFields(BaseModel):
    """Fields a visitor or administrator may set"""
    fullName: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    whatsappNumber: Optional[str] = None

    facebook: Optional[str] = None
    instagram: Optional[str] = None
    twitter: Optional[str] = None
    linkedin: Optional[str] = None

    macAddress: Optional[str] = None
    wifiNetwork: Optional[str] = None

    migrationStatus: Optional[MigrationStatus] = None
    employmentInterest: Optional[List[EmploymentInterest]] = None
    skills: Optional[List[str]] = None
    needsSupport: Optional[SupportNeed] = None
    contactPreference: Optional[List[ContactChannel]] = None
    preferredContactTime: Optional[ContactTime] = None
    location: Optional[Location] = None
    familyMembers: Optional[int] = Field(None, ge=0)

    consentDataProcessing: Optional[bool] = None
    consentContact: Optional[bool] = None

    class Config:
        use_enum_values = True


class VisitorRegistration(VisitorFields):
    """Registration form body; required fields are checked by the normalizer"""
    sessionId: Optional[str] = None
    deviceInfo: Optional[Union[Dict[str, Any], str]] = None


class VisitorUpdate(VisitorFields):
    """Patchable fields; anything server-managed is not listed and is ignored"""
    status: Optional[VisitorStatus] = None
    contactSuccess: Optional[bool] = None
    jobOpportunities: Optional[List[JobOpportunity]] = None
    lastAccess: Optional[datetime] = None


class ContactRequest(BaseModel):
    """Outreach attempt"""
    channel: str
    template: Optional[str] = None
    message: Optional[str] = None
    agent: Optional[str] = None
