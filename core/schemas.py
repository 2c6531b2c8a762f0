# core/schemas.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Set, Tuple


# -----------------------------
# Remote sheet names
# -----------------------------
AWB_SHEET = "AWB"
USERS_SHEET = "CADASTRO USUÁRIO"

SHIPMENT_KIND = "shipment"
USER_KIND = "user"


# -----------------------------
# Enumerations
# -----------------------------
class AWBStatus(Enum):
    """
    Closed set of shipment statuses.
    value = (English display label, value stored in the remote sheet)
    Declaration order is the order used by every report.
    """
    IN_TRANSIT = ("In Transit", "Em Trânsito")
    AVAILABLE = ("Available", "Disponível")
    PARTIALLY_COLLECTED = ("Partially Collected", "Coletado Parcial")
    DELIVERED = ("Delivered", "Entregue")
    DELAYED = ("Delayed", "Atrasado")
    AWAITING_WAYBILL = ("Awaiting Waybill", "Aguardando AWB")
    WRONG_COLLECTION = ("Wrong Collection", "Coleta Errada")
    OK = ("OK", "OK")

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def sheet_value(self) -> str:
        return self.value[1]

    def __str__(self) -> str:
        return self.label


DEFAULT_STATUS = AWBStatus.IN_TRANSIT


class Role(str, Enum):
    ADMIN = "admin"
    USER = "user"


class AccountStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"

    @property
    def sheet_value(self) -> str:
        return "ativo" if self is AccountStatus.ACTIVE else "inativo"


# -----------------------------
# Canonical records
# -----------------------------
@dataclass
class ShipmentRecord:
    id: str = ""
    supplier: str = ""
    dispatch_date: str = ""
    invoices: str = ""
    awb_number: str = ""
    status: AWBStatus = DEFAULT_STATUS
    arrival_date: str = ""
    brand: str = ""
    material: str = ""
    remark: str = ""
    tracking_url: str = ""
    documents: List[str] = field(default_factory=list)

    @property
    def invoice_refs(self) -> List[str]:
        """Invoice numbers split out of the free-text NF's cell."""
        parts = self.invoices.replace(";", ",").replace("/", ",").split(",")
        return [p.strip() for p in parts if p.strip()]


@dataclass
class UserAccount:
    id: str = ""
    name: str = ""
    email: str = ""
    password: str = ""
    role: Role = Role.USER
    status: AccountStatus = AccountStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status is AccountStatus.ACTIVE

    @property
    def login_key(self) -> str:
        return self.email.strip().lower()


# -----------------------------
# Alias tables (external header spellings per canonical attribute)
# -----------------------------
@dataclass(frozen=True)
class FieldAlias:
    """
    One canonical attribute and the external keys accepted for it, in priority order.
    `header` is the exact spelling written back to the remote sheet.
    """
    name: str
    header: str
    aliases: Tuple[str, ...] = ()

    @property
    def read_keys(self) -> Tuple[str, ...]:
        return (self.header,) + self.aliases


SHIPMENT_ID = FieldAlias("id", "ID", ("id",))

SHIPMENT_FIELDS: Tuple[FieldAlias, ...] = (
    FieldAlias("supplier", "Fornecedor", ("fornecedor",)),
    FieldAlias("dispatch_date", "Saída", ("saida",)),
    FieldAlias("invoices", "NF's", ("nfs",)),
    FieldAlias("awb_number", "AWB", ("awbNumber",)),
    FieldAlias("arrival_date", "Chegada", ("chegada",)),
    FieldAlias("brand", "Marca", ("marca",)),
    FieldAlias("material", "Material", ("material",)),
    FieldAlias("remark", "Observação", ("observacao",)),
    FieldAlias("tracking_url", "Rastreio", ("rastreio",)),
)

SHIPMENT_STATUS = FieldAlias("status", "Status", ("status",))
SHIPMENT_DOCUMENTS = FieldAlias("documents", "Documentos", ("documentos",))

USER_ID = FieldAlias("id", "ID", ("id",))

USER_FIELDS: Tuple[FieldAlias, ...] = (
    FieldAlias("name", "USUÁRIO", ("name",)),
    FieldAlias("email", "E-MAIL", ("email",)),
    FieldAlias("password", "SENHA", ("senha",)),
)

USER_ROLE = FieldAlias("role", "PAPEL", ("role",))
USER_STATUS = FieldAlias("status", "status", ("STATUS",))

DEFAULT_USER_NAME = "Usuário"


# -----------------------------
# Filters + reports
# -----------------------------
PERIODS: Dict[str, Optional[int]] = {
    "today": 1,
    "week": 7,
    "month": 30,
    "all": None,
}


@dataclass
class FilterState:
    """Sidebar filter selection. Empty `statuses` means no status filter."""
    statuses: Set[AWBStatus] = field(default_factory=set)
    period: str = "all"

    def toggle(self, status: AWBStatus) -> "FilterState":
        selected = set(self.statuses)
        if status in selected:
            selected.discard(status)
        else:
            selected.add(status)
        return FilterState(statuses=selected, period=self.period)

    def clear(self) -> "FilterState":
        return FilterState()

    @property
    def window_days(self) -> Optional[int]:
        return PERIODS.get(self.period)


@dataclass(frozen=True)
class ReportStats:
    total: int
    efficiency: int
    delayed: int
    status_distribution: List[Tuple[AWBStatus, int]]
    brand_distribution: List[Tuple[str, int]]
    material_distribution: List[Tuple[str, int]]
    timeline: List[Tuple[str, int]]
