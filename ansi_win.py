from ctypes.wintypes import DWORD
import ctypes
import msvcrt


# Input Constants
STD_INPUT_HANDLE = -10
ENABLE_VIRTUAL_TERMINAL_INPUT = 0x0200

# Output Constants
STD_OUTPUT_HANDLE = -11
ENABLE_PROCESSED_OUTPUT = 0x0001
ENABLE_WRAP_AT_EOL_OUTPUT = 0x0002
ENABLE_VIRTUAL_TERMINAL_PROCESSING = 0x0004


def initialize() -> (ctypes.c_long, ctypes.c_long):
    '''
    Switches the console to virtual terminal
    input and output, so keys arrive as the same
    escape sequences a unix terminal sends and
    the ANSI output is interpreted.

    Returns (output, input)
    '''
    kernel = ctypes.windll.kernel32
    stdin = kernel.GetStdHandle(STD_INPUT_HANDLE)
    stdout = kernel.GetStdHandle(STD_OUTPUT_HANDLE)
    istate = DWORD()
    ostate = DWORD()
    if not kernel.GetConsoleMode(stdin, ctypes.byref(istate)) or \
            not kernel.GetConsoleMode(stdout, ctypes.byref(ostate)):
        raise OSError("Unable to read console mode")
    kernel.SetConsoleMode(
            stdin,
            ENABLE_VIRTUAL_TERMINAL_INPUT
    )
    kernel.SetConsoleMode(
            stdout,
            ENABLE_PROCESSED_OUTPUT |
            ENABLE_WRAP_AT_EOL_OUTPUT |
            ENABLE_VIRTUAL_TERMINAL_PROCESSING
    )
    return (ostate, istate)


def reset(ostate: ctypes.c_long, istate: ctypes.c_long) -> None:
    '''
    Returns the console to the way
    it was before the application ran.
    '''
    kernel = ctypes.windll.kernel32
    stdin = kernel.GetStdHandle(STD_INPUT_HANDLE)
    stdout = kernel.GetStdHandle(STD_OUTPUT_HANDLE)
    kernel.SetConsoleMode(stdin, istate)
    kernel.SetConsoleMode(stdout, ostate)


def read_input() -> str:
    '''
    Blocks for one character, then drains
    whatever else is already buffered.
    '''
    data = msvcrt.getwch()
    while msvcrt.kbhit():
        data += msvcrt.getwch()
    return data
