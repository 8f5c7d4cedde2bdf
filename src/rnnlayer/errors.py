# src/rnnlayer/errors.py
"""
Katman kütüphanesinin hata sınıflandırması ve hata raporlayıcısı.

Üç hata türü vardır: AllocationFailure (bellek ayrılamadı), CopyFailure
(host/cihaz kopyası tamamlanmadı) ve DimensionMismatch (iki operandın
boyutları uyuşmuyor). Hatalar her zaman `ErrorReporter` üzerinden üretilir;
raporlayıcı hatayı loglar ve kaydeder, kontrol akışını değiştirmez.
Düşük seviyeli işlemler `Result` döndürür, çağıran taraf karar verir.
"""
import logging
from dataclasses import dataclass, field
from collections import deque
from typing import Any, Deque, Generic, Optional, Tuple, TypeVar

T = TypeVar("T")


class LayerError(RuntimeError):
    """Tüm katman hatalarının temel sınıfı."""
    kind: str = "layer_error"

    def __init__(self, message: str, names: Tuple[str, ...] = ()):
        super().__init__(message)
        self.names = names


class AllocationFailure(LayerError):
    kind = "alloc"


class CopyFailure(LayerError):
    kind = "copy"


class DimensionMismatch(LayerError, ValueError):
    kind = "dim"


@dataclass
class ErrorRecord:
    kind: str
    names: Tuple[str, ...]
    message: str


@dataclass
class Result(Generic[T]):
    """
    Başarılı bir değeri ya da bir `LayerError`'ı taşır.
    `unwrap()` hatayı fırlatır, böylece hata sessizce yutulamaz.
    """
    value: Optional[T] = None
    error: Optional[LayerError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value

    @classmethod
    def success(cls, value: Any = None) -> "Result":
        return cls(value=value)

    @classmethod
    def failure(cls, error: LayerError) -> "Result":
        return cls(error=error)


@dataclass
class ErrorReporter:
    """
    Raporlanan hataları loglar ve son `max_records` kaydı `records`'ta tutar;
    daha eski kayıtlar atılır. Uzun süren süreçlerde `clear()` ile boşaltılabilir.
    """
    max_records: int = 1000
    records: Deque[ErrorRecord] = field(init=False, repr=False)

    def __post_init__(self):
        self.records = deque(maxlen=self.max_records)
        self.logger = logging.getLogger(self.__class__.__name__)

    def _record(self, error: LayerError) -> LayerError:
        self.records.append(ErrorRecord(kind=error.kind, names=error.names, message=str(error)))
        self.logger.error(str(error))
        return error

    def alloc_error(self, varname: str, detail: Optional[str] = None) -> AllocationFailure:
        message = f"Allocation failed for '{varname}'"
        if detail:
            message += f": {detail}"
        return self._record(AllocationFailure(message, names=(varname,)))

    def copy_error(self, varname: str, detail: Optional[str] = None) -> CopyFailure:
        message = f"Host/device copy failed for '{varname}'"
        if detail:
            message += f": {detail}"
        return self._record(CopyFailure(message, names=(varname,)))

    def dim_error(self, varname1: str, varname2: str, detail: Optional[str] = None) -> DimensionMismatch:
        message = f"Dimension mismatch between '{varname1}' and '{varname2}'"
        if detail:
            message += f": {detail}"
        return self._record(DimensionMismatch(message, names=(varname1, varname2)))

    def clear(self) -> None:
        self.records.clear()


# Paket genelinde paylaşılan raporlayıcı
reporter = ErrorReporter()


def report_alloc_error(varname: str, detail: Optional[str] = None) -> AllocationFailure:
    return reporter.alloc_error(varname, detail)


def report_copy_error(varname: str, detail: Optional[str] = None) -> CopyFailure:
    return reporter.copy_error(varname, detail)


def report_dim_error(varname1: str, varname2: str, detail: Optional[str] = None) -> DimensionMismatch:
    return reporter.dim_error(varname1, varname2, detail)
