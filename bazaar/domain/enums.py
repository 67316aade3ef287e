# bazaar/domain/enums.py
import enum


class Role(str, enum.Enum):
    VENDOR = "vendor"
    WHOLESALER = "wholesaler"


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class OrderMethod(str, enum.Enum):
    MANUAL = "manual"
    VOICE = "voice"


class Language(str, enum.Enum):
    ENGLISH = "en"
    HINDI = "hi"
    TELUGU = "te"


class DocumentType(str, enum.Enum):
    AADHAAR = "aadhaar"
    RATION = "ration"
    VOTER = "voter"


class ProductCategory(str, enum.Enum):
    VEGETABLES = "vegetables"
    FRUITS = "fruits"
    GRAINS = "grains"
    SPICES = "spices"


class ProductUnit(str, enum.Enum):
    KG = "kg"
    BUNCH = "bunch"
    PIECE = "piece"
    LITER = "liter"
