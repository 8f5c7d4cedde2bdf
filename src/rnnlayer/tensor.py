# src/rnnlayer/tensor.py
import logging
import operator
from typing import Optional, Tuple

import numpy as np

from .errors import Result, report_alloc_error, report_copy_error, report_dim_error


class Tensor4:
    """
    Dört boyutlu yoğun sayısal tampon.

    Asıl veri host belleğinde bir NumPy dizisidir. `to_device()` verinin
    CuPy ile GPU'daki bir kopyasını oluşturur, `to_host()` bu kopyayı geri
    yazar. Her iki kopya da bloklayan (senkron) çağrılardır.

    Host'a yapılan yazmalar `set()` ya da `write()` üzerinden geçer ve bir
    sürüm sayacını artırır. Kopya alındıktan sonra host yazılmışsa cihaz
    kopyası eskimiştir; `to_host()` host verisinin üzerine yazmaz, kopyayı bırakır.
    """
    def __init__(self, data: np.ndarray, name: str = "tensor4"):
        if data.ndim != 4:
            raise report_dim_error(name, "tensor4", f"expected 4 dimensions, got {data.ndim}")
        self.name = name
        self.data = data
        self.device_data = None
        self._host_version = 0
        self._device_version: Optional[int] = None
        self.logger = logging.getLogger(self.__class__.__name__)

    @classmethod
    def allocate(cls, dim0: int, dim1: int, dim2: int, dim3: int,
                 dtype=np.float32, name: str = "tensor4") -> Result:
        """Sıfırlarla doldurulmuş bir tampon ayırır; hata durumunda AllocationFailure döner."""
        try:
            shape = tuple(operator.index(d) for d in (dim0, dim1, dim2, dim3))
        except TypeError:
            return Result.failure(report_alloc_error(name, f"non-integer dimension in {(dim0, dim1, dim2, dim3)}"))
        if any(d < 0 for d in shape):
            return Result.failure(report_alloc_error(name, f"negative dimension in {shape}"))
        try:
            data = np.zeros(shape, dtype=dtype)
        except (MemoryError, ValueError, TypeError) as e:
            return Result.failure(report_alloc_error(name, str(e)))
        return Result.success(cls(data, name=name))

    @property
    def shape(self) -> Tuple[int, int, int, int]:
        return self.data.shape

    @property
    def dtype(self):
        return self.data.dtype

    @property
    def on_device(self) -> bool:
        return self.device_data is not None

    @property
    def device_is_stale(self) -> bool:
        return self.on_device and self._device_version != self._host_version

    def _check_index(self, index: Tuple[int, ...]) -> Tuple[int, ...]:
        if len(index) != 4:
            raise report_dim_error(self.name, "index", f"expected 4 coordinates, got {len(index)}")
        checked = []
        for axis, (i, size) in enumerate(zip(index, self.data.shape)):
            try:
                i = operator.index(i)
            except TypeError:
                raise report_dim_error(
                    self.name, f"axis{axis}",
                    f"index {i!r} is not an integer"
                ) from None
            if not 0 <= i < size:
                raise report_dim_error(
                    self.name, f"axis{axis}",
                    f"index {i} is out of range [0, {size})"
                )
            checked.append(i)
        return tuple(checked)

    def at(self, i0: int, i1: int, i2: int, i3: int):
        return self.data[self._check_index((i0, i1, i2, i3))]

    def set(self, i0: int, i1: int, i2: int, i3: int, value) -> None:
        self.write(self._check_index((i0, i1, i2, i3)), value)

    def write(self, key, values) -> None:
        """Host verisinin bir dilimine yazar ve cihaz kopyasını eskimiş işaretler."""
        self.data[key] = values
        self._host_version += 1

    def view(self) -> np.ndarray:
        """Veriye kopyasız, salt-okunur bir görünüm döndürür."""
        return readonly(self.data)

    def to_device(self) -> Result:
        try:
            import cupy as cp
        except ImportError as e:
            return Result.failure(report_copy_error(self.name, f"cupy is not available ({e})"))
        try:
            self.device_data = cp.asarray(self.data)
            cp.cuda.Stream.null.synchronize()
        except Exception as e:
            self.device_data = None
            self._device_version = None
            return Result.failure(report_copy_error(self.name, str(e)))
        self._device_version = self._host_version
        self.logger.info(f"'{self.name}' copied to device, shape={self.shape}")
        return Result.success(self)

    def to_host(self) -> Result:
        if self.device_data is None:
            # Cihazda kopya yok, host verisi zaten günceldir
            return Result.success(self)
        if self.device_is_stale:
            self.logger.warning(
                f"'{self.name}' was written on host after the device copy; keeping host data, dropping device copy."
            )
            self._drop_device()
            return Result.success(self)
        try:
            import cupy as cp
            host = cp.asnumpy(self.device_data)
        except Exception as e:
            return Result.failure(report_copy_error(self.name, str(e)))
        self.data[...] = host
        self._host_version += 1
        self._drop_device()
        self.logger.info(f"'{self.name}' copied to host, shape={self.shape}")
        return Result.success(self)

    def _drop_device(self) -> None:
        self.device_data = None
        self._device_version = None

    def __repr__(self) -> str:
        return f"Tensor4(name={self.name!r}, shape={self.shape}, dtype={self.dtype}, on_device={self.on_device})"


def zeros_vector(length: int, dtype=np.float32, name: str = "vector") -> Result:
    """Tek boyutlu sıfır vektörü ayırır (outputs/errors için)."""
    if length < 0:
        return Result.failure(report_alloc_error(name, f"negative length {length}"))
    try:
        return Result.success(np.zeros(length, dtype=dtype))
    except (MemoryError, ValueError, TypeError) as e:
        return Result.failure(report_alloc_error(name, str(e)))


def readonly(array: np.ndarray) -> np.ndarray:
    v = array.view()
    v.flags.writeable = False
    return v


def check_length(values: np.ndarray, expected: int, name: str, expected_name: str) -> Optional[Exception]:
    """Uzunluk uyuşmazlığında raporlanmış bir DimensionMismatch döndürür."""
    if values.ndim != 1 or values.shape[0] != expected:
        return report_dim_error(name, expected_name, f"got shape {values.shape}, expected ({expected},)")
    return None
