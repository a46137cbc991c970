"""
Eclipse restart files.

A restart file holds the solution arrays of all active cells (PRESSURE,
SWAT, ...) together with header and well records. A unified restart file
(UNRST) holds one section per report step, each section starting with a
SEQNUM record. A non-unified restart file (Xnnnn) holds a single report
step.
"""
from __future__ import annotations

from collections import namedtuple
from pathlib import Path
from re import IGNORECASE, compile as re_compile

from ...errors import MissingKeywordError
from ...units import UnitSystem
from ..unformatted.base import unfmt_file

__all__ = ["Record", "RST_file", "RestartLocator"]

Record = namedtuple('Record', 'size data')

# Phase indicator in INTEHEAD, one bit per phase
OIL, WATER, GAS = 1, 2, 4


#==================================================================================================
class RST_file(unfmt_file):                                                              # RST_file
#==================================================================================================
    """
    Record store of a unified or non-unified restart file.

    Records are looked up in the current view, which is the whole file
    until ``select_block`` narrows it to the section of one report step.
    The file must be opened before lookup, preferably with ``with``:

        with RST_file('CASE.UNRST') as rst:
            if rst.select_block(10):
                pressure = rst.get('PRESSURE').data
    """

    start = 'SEQNUM'
    end = 'ENDSOL'
    #           variable   keyword   position
    var_pos =  {'step'  : ('SEQNUM'  ,  0),
                'units' : ('INTEHEAD',  2),
                'phases': ('INTEHEAD', 14),
                'nwell' : ('INTEHEAD', 16)}

    #----------------------------------------------------------------------------------------------
    def __init__(self, file, role=None):                                                 # RST_file
    #----------------------------------------------------------------------------------------------
        self._view = None
        self._step = None
        super().__init__(file, role=role)

    #----------------------------------------------------------------------------------------------
    def close(self):                                                                     # RST_file
    #----------------------------------------------------------------------------------------------
        """Close the file and reset the view to the whole file."""
        self._view = None
        self._step = None
        super().close()

    #----------------------------------------------------------------------------------------------
    def _blocks_in_view(self):                                                           # RST_file
    #----------------------------------------------------------------------------------------------
        if not self.is_open():
            raise SystemError(f'ERROR {self} must be opened before reading records')
        if self._view is None:
            self._view = tuple(self.blocks())
        return self._view

    #----------------------------------------------------------------------------------------------
    def selected_step(self):                                                             # RST_file
    #----------------------------------------------------------------------------------------------
        """Return the report step of the selected section, or None if no section is selected."""
        return self._step

    #----------------------------------------------------------------------------------------------
    def _step_of(self, block):                                                           # RST_file
    #----------------------------------------------------------------------------------------------
        """Return the report step of a SEQNUM record, or None for other records."""
        key, pos = self.var_pos['step']
        if key in block and block.length > pos:
            return int(block.data(pos, pos+1)[0])
        return None

    #----------------------------------------------------------------------------------------------
    def report_steps(self):                                                              # RST_file
    #----------------------------------------------------------------------------------------------
        """Return the report steps of the SEQNUM sections in the file, opened or not."""
        # Values are read while blocks() holds the mapping
        steps = (self._step_of(block) for block in self.blocks())
        return [step for step in steps if step is not None]

    #----------------------------------------------------------------------------------------------
    def select_block(self, report_step:int) -> bool:                                     # RST_file
    #----------------------------------------------------------------------------------------------
        """
        Narrow the view to the section of ``report_step``.

        Returns False, leaving the view unchanged, if the file has no such section.
        """
        if not self.is_open():
            raise SystemError(f'ERROR {self} must be opened before selecting a report step')
        for section in self.section_blocks():
            if self._step_of(section[0]) == report_step:
                self._view = section
                self._step = report_step
                return True
        return False

    #----------------------------------------------------------------------------------------------
    def keys(self):                                                                      # RST_file
    #----------------------------------------------------------------------------------------------
        """Return the keywords of the records in the view."""
        return [block.key() for block in self._blocks_in_view()]

    #----------------------------------------------------------------------------------------------
    def has(self, name:str) -> bool:                                                     # RST_file
    #----------------------------------------------------------------------------------------------
        """Return True if a record named ``name`` is in the view."""
        return any(name in block for block in self._blocks_in_view())

    #----------------------------------------------------------------------------------------------
    def get(self, name:str, occurrence:int=0) -> Record:                                 # RST_file
    #----------------------------------------------------------------------------------------------
        """
        Return size and values of the ``occurrence``'th record named ``name``.

        Raises MissingKeywordError if there is no such record in the view.
        """
        matches = [block for block in self._blocks_in_view() if name in block]
        if not 0 <= occurrence < len(matches):
            raise MissingKeywordError(name)
        values = matches[occurrence].data()
        return Record(values.size, values)

    #----------------------------------------------------------------------------------------------
    def value(self, var:str):                                                            # RST_file
    #----------------------------------------------------------------------------------------------
        """Return the header value named ``var`` in ``var_pos``."""
        if var not in self.var_pos:
            raise SyntaxWarning(f'Missing variable definition for {type(self).__name__}: {var}')
        key, pos = self.var_pos[var]
        block = next((b for b in self._blocks_in_view() if key in b), None)
        if block is None or block.length <= pos:
            raise MissingKeywordError(key)
        return block.data(pos, pos+1)[0]

    #----------------------------------------------------------------------------------------------
    def units(self) -> UnitSystem:                                                       # RST_file
    #----------------------------------------------------------------------------------------------
        """Return the unit system of the restart data."""
        return UnitSystem.from_code(self.value('units'))

    #----------------------------------------------------------------------------------------------
    def num_wells(self) -> int:                                                          # RST_file
    #----------------------------------------------------------------------------------------------
        """Return the number of wells."""
        return int(self.value('nwell'))

    #----------------------------------------------------------------------------------------------
    def num_phases(self) -> int:                                                         # RST_file
    #----------------------------------------------------------------------------------------------
        """Return the number of active phases given by the phase indicator."""
        phases = int(self.value('phases'))
        return sum(1 for bit in (OIL, WATER, GAS) if phases & bit)



#==================================================================================================
class RestartLocator:                                                              # RestartLocator
#==================================================================================================
    """
    Resolve restart file names from a root name and a report step.

    ``unifin`` and ``unifout`` tell whether restart files are read and
    written as unified files, like the UNIFIN and UNIFOUT deck keywords.
    """

    _known_suffix = re_compile(r'\.(DATA|UNRST|X\d{4})$', IGNORECASE)

    #----------------------------------------------------------------------------------------------
    def __init__(self, unifin=False, unifout=False):                               # RestartLocator
    #----------------------------------------------------------------------------------------------
        self.unifin = unifin
        self.unifout = unifout

    #----------------------------------------------------------------------------------------------
    def __repr__(self):                                                            # RestartLocator
    #----------------------------------------------------------------------------------------------
        return f'<{type(self).__name__}, unifin={self.unifin}, unifout={self.unifout}>'

    #----------------------------------------------------------------------------------------------
    def unified(self, output=False) -> bool:                                       # RestartLocator
    #----------------------------------------------------------------------------------------------
        """Return True if input (or output) restart files are unified."""
        return bool(self.unifout if output else self.unifin)

    #----------------------------------------------------------------------------------------------
    def filename(self, root, report_step:int, output=False) -> Path:               # RestartLocator
    #----------------------------------------------------------------------------------------------
        """
        Return the restart file of ``report_step`` for the case ``root``:
        ROOT.UNRST for unified files, ROOT.X0004 for report step 4 otherwise.
        """
        if report_step < 0:
            raise ValueError(f'Report step must be non-negative, got {report_step}')
        root = Path(root)
        name = self._known_suffix.sub('', root.name)
        suffix = '.UNRST' if self.unified(output) else f'.X{report_step:04d}'
        return root.with_name(name + suffix)
