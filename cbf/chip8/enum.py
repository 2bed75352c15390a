'''
This module contains the code tables of the CHIP-8 binary format.

These are reference data: the numeric values are the ones stored in the files.
The termination code (zero) is not part of the tables, it's handled by the
tables themselves.
'''
from enum import Enum

from ..exceptions import UnknownKindException


LABELS = {}
ALIASES = {}


class CodeTable(object):
    '''Mixin to resolve the members by value, by name or by label.'''

    @property
    def label(self):
        return LABELS.get(self, self.name.lower())

    @classmethod
    def lookup(cls, item):
        if isinstance(item, cls):
            return item

        if isinstance(item, str):
            for member in cls:
                if item in (member.name, member.name.lower(), member.label):
                    return member
            if item in ALIASES and isinstance(ALIASES[item], cls):
                return ALIASES[item]
            if item.isdigit():
                item = int(item)

        if isinstance(item, int) and not isinstance(item, bool):
            try:
                return cls(item)
            except ValueError:
                pass

        raise UnknownKindException(f"'{item}' is not a valid {cls.__name__}")


class Platform(CodeTable, Enum):
    CHIP_8                         = 0x01
    CHIP_8_1_2                     = 0x02
    CHIP_8I                        = 0x03
    CHIP_8_II                      = 0x04
    CHIP_8III                      = 0x05
    TWO_PAGE_DISPLAY_CHIP_8        = 0x06
    CHIP_8C                        = 0x07
    CHIP_10                        = 0x08
    CHIP_8_SAVE_RESTORE            = 0x09
    CHIP_8_SAVE_RESTORE_IMPROVED   = 0x0A
    CHIP_8_RELATIVE_BRANCHING      = 0x0B
    CHIP_8_RELATIVE_BRANCHING_ALT  = 0x0C
    CHIP_8_FAST_DXYN               = 0x0D
    CHIP_8_IO_PORT                 = 0x0E
    CHIP_8_MULTIPLY_DIVIDE         = 0x0F
    HIRES_CHIP_8                   = 0x10
    HIRES_CHIP_8_IO                = 0x11
    HIRES_CHIP_8_PAGE_SWITCHING    = 0x12
    CHIP_8E                        = 0x13
    CHIP_8_IMPROVED_BNNN           = 0x14
    CHIP_8_SCROLLING               = 0x15
    CHIP_8X                        = 0x16
    TWO_PAGE_DISPLAY_CHIP_8X       = 0x17
    HIRES_CHIP_8X                  = 0x18
    CHIP_8Y                        = 0x19
    CHIP_8_COPY_TO_SCREEN          = 0x1A
    CHIP_BETA                      = 0x1B
    CHIP_8M                        = 0x1C
    MULTIPLE_NIM                   = 0x1D
    DOUBLE_ARRAY                   = 0x1E
    CHIPOS                         = 0x1F
    CHIPOSLO                       = 0x20
    CHIPOS_JOYSTICK                = 0x21
    CHIPOS_2K                      = 0x22
    CHIP_8_ETI_660                 = 0x23
    CHIP_8_ETI_660_COLOR           = 0x24
    CHIP_8_ETI_660_HIRES           = 0x25
    CHIP_8_COSMAC_ELF              = 0x26
    CHIP_VDU                       = 0x27
    CHIP_8_AE                      = 0x28
    DREAMCARDS_EXTENDED            = 0x29
    AMIGA_CHIP_8                   = 0x2A
    CHIP_48                        = 0x2B
    SUPER_CHIP_1_0                 = 0x2C
    SUPER_CHIP_1_1                 = 0x2D
    GCHIP                          = 0x2E
    SCHPC_GCHPC                    = 0x2F
    VIP2K_CHIP_8                   = 0x30
    SUPER_CHIP_SCROLL_UP           = 0x31
    CHIP8RUN                       = 0x32
    MEGA_CHIP                      = 0x33
    XO_CHIP                        = 0x34
    OCTO                           = 0x35
    CHIP_8_CLASSIC_COLOR           = 0x36


class Multiplicity(Enum):
    SINGLE = 1
    MULTI  = 2


class PropertyKind(CodeTable, Enum):
    CYCLES_PER_FRAME    = 0x01
    NAME                = 0x02
    DESCRIPTION         = 0x03
    AUTHORS             = 0x04
    URLS                = 0x05
    RELEASE_DATE        = 0x06
    IMAGE               = 0x07
    KEYS                = 0x08
    COLOURS             = 0x09
    SCREEN_ORIENTATION  = 0x0B
    FONT_DATA           = 0x0C
    TOOL_VANITY         = 0x0D
    LICENSE_INFORMATION = 0x0E

    @property
    def key(self):
        '''The name used in the properties dictionary.'''
        return self.name.lower()

    @property
    def multiplicity(self):
        return MULTIPLICITY.get(self, Multiplicity.SINGLE)


class Key(CodeTable, Enum):
    '''Logical keys a program can be mapped to.'''
    UP    = 0x00
    DOWN  = 0x01
    LEFT  = 0x02
    RIGHT = 0x03
    A     = 0x04
    B     = 0x05


class ScreenOrientation(CodeTable, Enum):
    NORMAL        = 0x00  # display is on its feet, top is up
    LEFT_SIDE_UP  = 0x01  # display is put on its right side
    RIGHT_SIDE_UP = 0x02  # display is put on its left side
    UPSIDE_DOWN   = 0x03  # bottom is up


MULTIPLICITY = {
    PropertyKind.AUTHORS: Multiplicity.MULTI,
    PropertyKind.URLS:    Multiplicity.MULTI,
}


LABELS.update({
    Platform.CHIP_8:                        'CHIP-8',
    Platform.CHIP_8_1_2:                    'CHIP-8 1/2',
    Platform.CHIP_8I:                       'CHIP-8I',
    Platform.CHIP_8_II:                     'CHIP-8 II aka. Keyboard Kontrol',
    Platform.CHIP_8III:                     'CHIP-8III',
    Platform.TWO_PAGE_DISPLAY_CHIP_8:       'Two-page display for CHIP-8',
    Platform.CHIP_8C:                       'CHIP-8C',
    Platform.CHIP_10:                       'CHIP-10',
    Platform.CHIP_8_SAVE_RESTORE:           'CHIP-8 modification for saving and restoring variables',
    Platform.CHIP_8_SAVE_RESTORE_IMPROVED:  'Improved CHIP-8 modification for saving and restoring variables',
    Platform.CHIP_8_RELATIVE_BRANCHING:     'CHIP-8 modification with relative branching',
    Platform.CHIP_8_RELATIVE_BRANCHING_ALT: 'Another CHIP-8 modification with relative branching',
    Platform.CHIP_8_FAST_DXYN:              'CHIP-8 modification with fast, single-dot DXYN',
    Platform.CHIP_8_IO_PORT:                'CHIP-8 with I/O port driver routine',
    Platform.CHIP_8_MULTIPLY_DIVIDE:        'CHIP-8 8-bit multiply and divide',
    Platform.HIRES_CHIP_8:                  'HI-RES CHIP-8 (four-page display)',
    Platform.HIRES_CHIP_8_IO:               'HI-RES CHIP-8 with I/O',
    Platform.HIRES_CHIP_8_PAGE_SWITCHING:   'HI-RES CHIP-8 with page switching',
    Platform.CHIP_8E:                       'CHIP-8E',
    Platform.CHIP_8_IMPROVED_BNNN:          'CHIP-8 with improved BNNN',
    Platform.CHIP_8_SCROLLING:              'CHIP-8 scrolling routine',
    Platform.CHIP_8X:                       'CHIP-8X',
    Platform.TWO_PAGE_DISPLAY_CHIP_8X:      'Two-page display for CHIP-8X',
    Platform.HIRES_CHIP_8X:                 'Hi-res CHIP-8X',
    Platform.CHIP_8Y:                       'CHIP-8Y',
    Platform.CHIP_8_COPY_TO_SCREEN:         'CHIP-8 “Copy to Screen”',
    Platform.CHIP_BETA:                     'CHIP-BETA',
    Platform.CHIP_8M:                       'CHIP-8M',
    Platform.MULTIPLE_NIM:                  'Multiple Nim interpreter',
    Platform.DOUBLE_ARRAY:                  'Double Array Modification',
    Platform.CHIPOS:                        'CHIP-8 for DREAM 6800 (CHIPOS)',
    Platform.CHIPOSLO:                      'CHIP-8 with logical operators for DREAM 6800 (CHIPOSLO)',
    Platform.CHIPOS_JOYSTICK:               'CHIP-8 for DREAM 6800 with joystick',
    Platform.CHIPOS_2K:                     '2K CHIPOS for DREAM 6800',
    Platform.CHIP_8_ETI_660:                'CHIP-8 for ETI-660',
    Platform.CHIP_8_ETI_660_COLOR:          'CHIP-8 with color support for ETI-660',
    Platform.CHIP_8_ETI_660_HIRES:          'CHIP-8 for ETI-660 with high resolution',
    Platform.CHIP_8_COSMAC_ELF:             'CHIP-8 for COSMAC ELF',
    Platform.CHIP_VDU:                      'CHIP-VDU / CHIP-8 for the ACE VDU',
    Platform.CHIP_8_AE:                     'CHIP-8 AE (ACE Extended)',
    Platform.DREAMCARDS_EXTENDED:           'Dreamcards Extended CHIP-8 V2.0',
    Platform.AMIGA_CHIP_8:                  'Amiga CHIP-8 interpreter',
    Platform.CHIP_48:                       'CHIP-48',
    Platform.SUPER_CHIP_1_0:                'SUPER-CHIP 1.0',
    Platform.SUPER_CHIP_1_1:                'SUPER-CHIP 1.1',
    Platform.GCHIP:                         'GCHIP',
    Platform.SCHPC_GCHPC:                   'SCHIP Compatibility (SCHPC) and GCHIP Compatibility (GCHPC)',
    Platform.VIP2K_CHIP_8:                  'VIP2K CHIP-8',
    Platform.SUPER_CHIP_SCROLL_UP:          'SUPER-CHIP with scroll up',
    Platform.CHIP8RUN:                      'chip8run',
    Platform.MEGA_CHIP:                     'Mega-Chip',
    Platform.XO_CHIP:                       'XO-CHIP',
    Platform.OCTO:                          'Octo',
    Platform.CHIP_8_CLASSIC_COLOR:          'CHIP-8 Classic / Color',

    # the names used by the JSON files that come with the ROMs
    PropertyKind.CYCLES_PER_FRAME:    'cyclesPerFrame',
    PropertyKind.RELEASE_DATE:        'releaseDate',
    PropertyKind.SCREEN_ORIENTATION:  'screenOrientation',
    PropertyKind.FONT_DATA:           'fontData',
    PropertyKind.TOOL_VANITY:         'toolVanity',
    PropertyKind.LICENSE_INFORMATION: 'licenseInformation',

    ScreenOrientation.NORMAL:        'normal',
    ScreenOrientation.LEFT_SIDE_UP:  'left side up',
    ScreenOrientation.RIGHT_SIDE_UP: 'right side up',
    ScreenOrientation.UPSIDE_DOWN:   'upside down',
})


ALIASES.update({
    'author': PropertyKind.AUTHORS,
    'url':    PropertyKind.URLS,
    'colors': PropertyKind.COLOURS,
})
