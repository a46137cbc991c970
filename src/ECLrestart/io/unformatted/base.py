"""
Records of unformatted Eclipse files.

An unformatted file is a sequence of Fortran-style records written in
big-endian mode. Each record has a 16 byte header holding an 8 character
keyword, the number of values and a 4 character type, followed by the
values split into payload chunks of at most ``Dtyp.max`` values. Every
header and chunk is wrapped in a leading and trailing 4 byte size marker.
"""
from __future__ import annotations

from logging import getLogger
from mmap import ACCESS_READ, mmap
from struct import pack, unpack, error as struct_error

from numpy import array as nparray, asarray, char as npchar, dtype as npdtype, frombuffer, ndarray

from ...config import ENDIAN
from ...core import DTYPE, DTYPE_ALIAS, File
from ...errors import FileOpenError
from ...utils import chunk_edges, keyword, pairwise

__all__ = ["unfmt_header", "unfmt_block", "unfmt_file", "ENDSOL"]

logger = getLogger(__name__)


#==================================================================================================
class unfmt_header:                                                                  # unfmt_header
#==================================================================================================
    """Metadata describing the header of an unformatted record."""

    #         | h e a d e r  |     d a t a     |     d a t a     |    d a t a      |
    #         |4i|8s|4i|4s|4i|4i| 1000 data |4i|4i| 1000 data |4i|4i| 1000 data |4i|
    #  bytes  |      24      |4 | 1000*size |  8  | 1000*size |  8  | 1000*size |4 |

    #----------------------------------------------------------------------------------------------
    def __init__(self, key:bytes=b'', length:int=0, type:bytes=b'', startpos:int=0):   # unfmt_header
    #----------------------------------------------------------------------------------------------
        """
        Parameters:
        key (bytes): The 8 byte keyword of the record.
        length (int): The number of values in the record.
        type (bytes): The 4 byte datatype, a key of DTYPE.
        startpos (int): Byte position of the header in the file.
        """
        self._key = key
        self.length = length
        self.type = type
        self.startpos = startpos
        self.dtype = DTYPE[type]
        self.bytes = length*self.dtype.size
        if length:
            # _data_pos gives the start of the last value
            self.endpos = self._data_pos(length-1) + self.dtype.size + 4
        else:
            # No data, only header
            self.endpos = startpos + 24

    @classmethod
    #----------------------------------------------------------------------------------------------
    def from_bytes(cls, _bytes, startpos=0):                                         # unfmt_header
    #----------------------------------------------------------------------------------------------
        """Create a header from the 16 bytes between the size markers, or False if invalid."""
        try:
            key, length, typ = unpack(ENDIAN+'8si4s', _bytes)
            if length < 0:
                return False
            return cls(key, length, typ, startpos)
        except (KeyError, ValueError, struct_error):
            return False

    #----------------------------------------------------------------------------------------------
    def as_bytes(self):                                                              # unfmt_header
    #----------------------------------------------------------------------------------------------
        """Return the header serialized with its size markers."""
        return pack(ENDIAN+'i8si4si', 16, self._key, self.length, self.type, 16)

    #----------------------------------------------------------------------------------------------
    def __str__(self):                                                               # unfmt_header
    #----------------------------------------------------------------------------------------------
        return (f'key={self._key.decode():8s}, type={self.type.decode():4s}, bytes={self.bytes:8d}, '
                f'length={self.length:8d}, start={self.startpos:8d}, end={self.endpos:8d}')

    #----------------------------------------------------------------------------------------------
    def _data_pos(self, pos):                                                        # unfmt_header
    #----------------------------------------------------------------------------------------------
        """Return the absolute file position of value number ``pos``."""
        # 8 bytes (two size markers) are added at each transition between payload chunks
        return self.startpos + 24 + 4 + pos*self.dtype.size + 8*(pos//self.dtype.max)

    #----------------------------------------------------------------------------------------------
    def _data_slices(self, start=0, stop=None):                                      # unfmt_header
    #----------------------------------------------------------------------------------------------
        """
        Return the byte slices holding the values ``start`` to ``stop``.

        One slice is returned for each payload chunk touched by the range,
        the size markers between the chunks are left out.
        """
        stop = self.length if stop is None else stop
        if not 0 <= start <= stop <= self.length:
            raise IndexError(
                f'{self._key.decode().strip()}: range {(start, stop)} is out of bounds {(0, self.length)}')
        size = self.dtype.size
        edges = chunk_edges(start, stop, self.dtype.max)
        return [slice(self._data_pos(a), self._data_pos(b-1) + size) for a, b in pairwise(edges)]

    #----------------------------------------------------------------------------------------------
    def is_char(self):                                                               # unfmt_header
    #----------------------------------------------------------------------------------------------
        """Return True if the values are strings."""
        return self.type[0:1] == b'C'



#==================================================================================================
class unfmt_block:                                                                    # unfmt_block
#==================================================================================================
    """A single record of an unformatted file."""

    #----------------------------------------------------------------------------------------------
    def __init__(self, header:unfmt_header=None, data=None):                         # unfmt_block
    #----------------------------------------------------------------------------------------------
        """
        Parameters:
        header (unfmt_header): The header of the record.
        data: The mapped file holding the record, or the values of a new record.
        """
        self.header = header
        self._data = data
        logger.debug('Creating %s', self)

    @classmethod
    #----------------------------------------------------------------------------------------------
    def from_data(cls, key:str, data, _dtype:str):                                    # unfmt_block
    #----------------------------------------------------------------------------------------------
        """Create a record from values, ``_dtype`` is one of int, float, double, bool, char, mess."""
        typ = DTYPE_ALIAS[_dtype]
        dtype = DTYPE[typ]
        if typ[0:1] == b'C':
            data = [keyword(v)[:dtype.size].ljust(dtype.size) for v in data]
        data = asarray(data, dtype=npdtype(dtype.nptype).newbyteorder(ENDIAN))
        if data.ndim > 1:
            # Fortran order, first index varies fastest
            data = data.flatten(order='F')
        return cls(unfmt_header(keyword(key), data.size, typ), data)

    #----------------------------------------------------------------------------------------------
    def __str__(self):                                                                # unfmt_block
    #----------------------------------------------------------------------------------------------
        return str(self.header)

    #----------------------------------------------------------------------------------------------
    def __repr__(self):                                                               # unfmt_block
    #----------------------------------------------------------------------------------------------
        return f'<{self}>'

    #----------------------------------------------------------------------------------------------
    def __contains__(self, key):                                                      # unfmt_block
    #----------------------------------------------------------------------------------------------
        """Return True if ``key`` is the keyword of this record."""
        return self.key() == key

    #----------------------------------------------------------------------------------------------
    def __getattr__(self, item):                                                      # unfmt_block
    #----------------------------------------------------------------------------------------------
        """Delegate attribute access to the header."""
        if item == 'header':
            raise AttributeError(item)
        return getattr(self.header, item)

    #----------------------------------------------------------------------------------------------
    def key(self):                                                                    # unfmt_block
    #----------------------------------------------------------------------------------------------
        """Return the keyword as a stripped string."""
        return self.header._key.decode().strip()

    #----------------------------------------------------------------------------------------------
    def type(self):                                                                   # unfmt_block
    #----------------------------------------------------------------------------------------------
        """Return the datatype as a string."""
        return self.header.type.decode()

    #----------------------------------------------------------------------------------------------
    def _read_data(self, start, stop):                                                # unfmt_block
    #----------------------------------------------------------------------------------------------
        """Return the raw values between ``start`` and ``stop`` as a NumPy array."""
        if isinstance(self._data, ndarray):
            # Record created from values
            return self._data[start:stop]
        raw = b''.join(self._data[sl] for sl in self.header._data_slices(start, stop))
        dtype = npdtype(self.header.dtype.nptype).newbyteorder(ENDIAN)
        return frombuffer(raw, dtype=dtype)

    #----------------------------------------------------------------------------------------------
    def data(self, start=0, stop=None, strip=True):                                   # unfmt_block
    #----------------------------------------------------------------------------------------------
        """
        Return the values ``start`` to ``stop`` (all values by default) as a NumPy array.

        Strings are decoded (and stripped if ``strip``), logicals are returned as bool.
        """
        if self.header.length == 0:
            return nparray([], dtype=self.header.dtype.nptype)
        values = self._read_data(start, stop)
        if self.header.is_char():
            values = npchar.decode(values, 'utf-8')
            if strip:
                values = npchar.strip(values)
        elif self.header.type == b'LOGI':
            values = values != 0
        return values

    #----------------------------------------------------------------------------------------------
    def _pack_data(self):                                                             # unfmt_block
    #----------------------------------------------------------------------------------------------
        """Yield the payload chunks with their size markers."""
        # 4i| 1000 data |4i|4i| 1000 data |4i|4i| 1000 data |4i|...
        dtype = self.header.dtype
        values = self._read_data(0, None)
        for a, b in pairwise(chunk_edges(0, values.size, dtype.max)):
            marker = pack(ENDIAN + 'i', (b - a) * dtype.size)
            yield marker + values[a:b].tobytes() + marker

    #----------------------------------------------------------------------------------------------
    def as_bytes(self):                                                               # unfmt_block
    #----------------------------------------------------------------------------------------------
        """Return the record serialized as bytes."""
        return self.header.as_bytes() + b''.join(self._pack_data())



#==================================================================================================
class unfmt_file(File):                                                                # unfmt_file
#==================================================================================================
    """
    Reader for unformatted Eclipse files.

    The file can be scanned without being opened, in which case it is
    memory mapped only while the records are iterated. After ``open()``
    (or inside a ``with`` statement) the mapping is kept until ``close()``.
    """

    start = None
    end = None

    #----------------------------------------------------------------------------------------------
    def __init__(self, filename, **kwargs):                                            # unfmt_file
    #----------------------------------------------------------------------------------------------
        self._file_obj = None
        self._map = None
        super().__init__(filename, **kwargs)

    #----------------------------------------------------------------------------------------------
    def __repr__(self):                                                                # unfmt_file
    #----------------------------------------------------------------------------------------------
        return f'<{super().__repr__()}, open={self.is_open()}>'

    #----------------------------------------------------------------------------------------------
    def __enter__(self):                                                               # unfmt_file
    #----------------------------------------------------------------------------------------------
        return self.open()

    #----------------------------------------------------------------------------------------------
    def __exit__(self, *exc):                                                          # unfmt_file
    #----------------------------------------------------------------------------------------------
        self.close()
        return False

    #----------------------------------------------------------------------------------------------
    def is_open(self):                                                                 # unfmt_file
    #----------------------------------------------------------------------------------------------
        return self._map is not None

    #----------------------------------------------------------------------------------------------
    def open(self):                                                                    # unfmt_file
    #----------------------------------------------------------------------------------------------
        """Memory map the file until ``close()`` is called; raise FileOpenError on failure."""
        if self.is_open():
            return self
        self.exists(raise_error=True)
        if not self.size():
            raise FileOpenError(self.path, "is empty")
        try:
            self._file_obj = open(self.path, mode='rb')
            self._map = mmap(self._file_obj.fileno(), length=0, access=ACCESS_READ)
        except (OSError, ValueError) as error:
            self.close()
            raise FileOpenError(self.path, f"could not be opened: {error}") from error
        logger.debug('Opened %r', self)
        return self

    #----------------------------------------------------------------------------------------------
    def close(self):                                                                   # unfmt_file
    #----------------------------------------------------------------------------------------------
        """Release the memory map and the file object."""
        if self._map is not None:
            self._map.close()
            self._map = None
        if self._file_obj is not None:
            self._file_obj.close()
            self._file_obj = None
            logger.debug('Closed %r', self)

    #----------------------------------------------------------------------------------------------
    def blocks(self):                                                                  # unfmt_file
    #----------------------------------------------------------------------------------------------
        """Iterate over the records of the file."""
        if self.is_open():
            yield from self._scan(self._map)
            return
        if not self.is_file() or not self.size():
            return
        with self.mmap() as data:
            yield from self._scan(data)

    #----------------------------------------------------------------------------------------------
    def _scan(self, data):                                                             # unfmt_file
    #----------------------------------------------------------------------------------------------
        """Yield the records of ``data``, stop at the first unreadable header."""
        size = len(data)
        pos = 0
        while pos < size:
            header = size - pos >= 24 and unfmt_header.from_bytes(data[pos+4:pos+20], pos)
            if not header:
                logger.warning('Unreadable record header at byte %d of %s, skipping the rest', pos, self)
                return
            if header.endpos > size:
                logger.warning('Record %s at byte %d of %s is truncated', header._key.decode().strip(), pos, self)
                return
            pos = header.endpos
            yield unfmt_block(header=header, data=data)

    #----------------------------------------------------------------------------------------------
    def section_blocks(self):                                                          # unfmt_file
    #----------------------------------------------------------------------------------------------
        """
        Yield the records grouped in sections. A section starts at the ``start``
        keyword and is closed by the ``end`` keyword, records following an
        ``end`` record form a section of their own. Files without start and
        end keywords form a single section.
        """
        section = []
        for block in self.blocks():
            if section and self.start and self.start in block:
                yield tuple(section)
                section = []
            section.append(block)
            if self.end and self.end in block:
                yield tuple(section)
                section = []
        if section:
            yield tuple(section)

    #----------------------------------------------------------------------------------------------
    def section_keys(self):                                                            # unfmt_file
    #----------------------------------------------------------------------------------------------
        """Return the keywords of the first section."""
        return [bl.key() for bl in next(self.section_blocks(), ())]

    #----------------------------------------------------------------------------------------------
    def write(self, blocks, append=False):                                             # unfmt_file
    #----------------------------------------------------------------------------------------------
        """Write ``blocks`` to the file, appending to it if ``append`` is True."""
        if self.is_open():
            raise SystemError(f'ERROR {self} is open for reading')
        self.write_bytes(b''.join(block.as_bytes() for block in blocks), append=append)
        return self

#--------------------------------------------------------------------------------------------------
ENDSOL = unfmt_block.from_data('ENDSOL', [], 'mess')
#--------------------------------------------------------------------------------------------------
# Empty record that terminates a SEQNUM - ENDSOL section in UNRST-files
