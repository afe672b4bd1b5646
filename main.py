import sys
import shutil
import signal
import argparse
import traceback
import configparser
from pathlib import Path
from dataclasses import dataclass, field
from keys import decode
from state import ComposerState
from input_router import InputRouter, Message
from navigation import PayloadTab, parse_tabs
from req_struct import HttpMethod, TransportError
from transport import DEFAULT_TIMEOUT, send_request
from assembler import SubmitPolicy, assemble, check_request
from render import (
    BorderStyle, ColorMode, RenderState, Theme, disable_buffer,
    enable_buffer, populate_borders, populate_response,
    populate_response_error, render, show_cursor, split_columns
)


# Used when no theme file is given or a key is missing from it
DEFAULT_THEME = {
    "4bit": {
        "text_color": "37",
        "title_color": "33",
        "border_color": "37",
        "active_section_color": "36",
        "invalid_color": "31",
        "selected_tab_color": "34",
    },
    "8bit": {
        "text_color": "252",
        "title_color": "221",
        "border_color": "245",
        "active_section_color": "44",
        "invalid_color": "160",
        "selected_tab_color": "75",
    },
    "24bit": {
        "text_color": "220,220,220",
        "title_color": "235,200,95",
        "border_color": "140,140,140",
        "active_section_color": "90,200,220",
        "invalid_color": "220,80,80",
        "selected_tab_color": "100,150,240",
    },
}


@dataclass
class Arguments:
    # Arguments {{{
    debug: bool = False
    strict: bool = False
    theme_file: str | None = None
    method: HttpMethod | None = None
    timeout: float = DEFAULT_TIMEOUT
    color_mode: ColorMode = ColorMode.Bit24
    border_style: BorderStyle = BorderStyle.Rounded
    tabs: list[PayloadTab] = field(
        default_factory=lambda: list(PayloadTab)
    )

    @property
    def policy(self) -> SubmitPolicy:
        return SubmitPolicy(require_valid_uri=True,
                            require_valid_json=self.strict)
    # }}}


# Globals, be cautious with use
global_exception: Exception | None = None


def main() -> None:
    """
    Main wraps the platform
    specific implementation
    """
    # main {{{
    try:
        args = parse_args()
        theme = parse_colors(args)
    except Exception as exception:
        print(exception, file=sys.stderr)
        sys.exit(1)

    if sys.platform == "win32":
        _win_main(args, theme)
    else:
        _nix_main(args, theme)
    # }}}


def _main_loop(driver: any, args: Arguments, theme: Theme) -> None:
    """
    Single threaded loop: draw the screen, block
    for input, route every decoded key and repeat
    until the quit key arrives.
    """
    # _main_loop {{{
    composer = ComposerState(args.tabs)
    router = InputRouter(composer)
    state = RenderState(
        borders=populate_borders(args.border_style), theme=theme,
        color_mode=args.color_mode, size=shutil.get_terminal_size(),
        debug=args.debug
    )

    enable_buffer()
    try:
        resizeflag = True  # Ensure screen is initially cleared
        f_quit = False     # Flag quit
        while not f_quit:
            render(state, composer, resizeflag)

            for event in decode(driver.read_input()):
                match router.route(event):
                    case Message.Quit:
                        f_quit = True
                        break

                    case Message.Submit:
                        state.response = ["Sending request.."]
                        render(state, composer, False)
                        state.response = submit(composer, args, state)

            new_size = shutil.get_terminal_size()
            resizeflag = new_size != state.size
            state.size = new_size
    finally:
        show_cursor()
        disable_buffer()
    # }}}


def _win_main(args: Arguments, theme: Theme) -> None:
    # _win_main {{{
    import ansi_win

    driver = ansi_win
    try:
        ostate, istate = driver.initialize()
    except Exception as exception:
        print(f"Unable to prepare the console: {exception}", file=sys.stderr)
        sys.exit(1)

    def signal_trap(sig, frame) -> None:
        """
        Ensures terminal state is restored
        """
        disable_buffer()
        driver.reset(ostate, istate)
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_trap)

    try:
        _main_loop(driver, args, theme)
    except Exception as exception:
        global global_exception
        global_exception = exception
    finally:
        driver.reset(ostate, istate)

    _exit()
    # }}}


def _nix_main(args: Arguments, theme: Theme) -> None:
    # _nix_main {{{
    import ansi_nix

    driver = ansi_nix
    try:
        orig_state = driver.initialize()
    except Exception as exception:
        print(f"Unable to enter raw mode: {exception}", file=sys.stderr)
        sys.exit(1)

    def signal_trap(sig, frame) -> None:
        """
        Ensures terminal state is restored
        """
        disable_buffer()
        driver.reset(orig_state)
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_trap)

    try:
        _main_loop(driver, args, theme)
    except Exception as exception:
        global global_exception
        global_exception = exception
    finally:
        driver.reset(orig_state)

    _exit()
    # }}}


def _exit() -> None:
    """
    Reports an exception from the loop only once
    the terminal is back to normal, which is
    also what decides the exit status.
    """
    # _exit {{{
    if global_exception is not None:
        print(global_exception, file=sys.stderr)
        traceback.print_tb(global_exception.__traceback__)
        sys.exit(1)
    sys.exit(0)
    # }}}


def parse_args(argv: list[str] | None = None) -> Arguments:
    # parse_args {{{
    description = "Compose and send HTTP requests in the terminal"
    parser = argparse.ArgumentParser(description=description)

    parser.add_argument("-t", "--theme",
                        help="Path to theme file " +
                        "(defaults to 'theme.ini' beside the script)")

    parser.add_argument("-m", "--mode",
                        help="Color style: '4bit', '8bit', or '24bit' " +
                        "(defaults to '24bit')")

    parser.add_argument("-b", "--border",
                        help="Border style: 'single', 'double' " +
                        "or 'rounded' (defaults to 'rounded')")

    parser.add_argument("-X", "--method",
                        help="HTTP method to send with " +
                        "(defaults to POST with a body, GET without)")

    parser.add_argument("--timeout", type=float,
                        help="Seconds to wait for a response " +
                        f"(defaults to {DEFAULT_TIMEOUT})")

    parser.add_argument("--tabs",
                        help="Payload tabs in order, e.g. 'body,headers' " +
                        "(defaults to 'headers,body')")

    parser.add_argument("--strict", action="store_true",
                        help="Refuse to send a body that is not valid JSON")

    parser.add_argument("-g", "--debug", action="store_true",
                        help=argparse.SUPPRESS)

    args = Arguments()
    parsed_args = parser.parse_args(argv)

    if parsed_args.theme is not None:
        args.theme_file = parsed_args.theme
        if not Path(args.theme_file).exists():
            raise Exception(f"No theme file [{args.theme_file}] found")
    else:
        # Ensure we can run this script with anywhere
        scriptdir = Path(__file__).parent
        args.theme_file = Path(scriptdir, "theme.ini")

    if parsed_args.mode is not None:
        args.color_mode = (ColorMode)(parsed_args.mode.lower())

    if parsed_args.border is not None:
        args.border_style = (BorderStyle)(parsed_args.border.lower())

    if parsed_args.method is not None:
        args.method = (HttpMethod)(parsed_args.method.upper())

    if parsed_args.timeout is not None:
        if parsed_args.timeout <= 0:
            raise Exception("Timeout must be a positive number of seconds")
        args.timeout = parsed_args.timeout

    if parsed_args.tabs is not None:
        args.tabs = parse_tabs(parsed_args.tabs)

    args.strict = parsed_args.strict
    args.debug = parsed_args.debug

    return args
    # }}}


def parse_colors(args: Arguments) -> Theme:
    # parse_colors {{{
    cp = configparser.ConfigParser()
    cp.read_dict(DEFAULT_THEME)
    if args.theme_file is not None:
        cp.read(args.theme_file)
    mode = args.color_mode.value

    def color(key: str) -> str:
        return validate_colors(key, cp[mode][key], args.color_mode)

    return Theme(
        text_color=color("text_color"),
        title_color=color("title_color"),
        border_color=color("border_color"),
        active_color=color("active_section_color"),
        invalid_color=color("invalid_color"),
        selected_color=color("selected_tab_color")
    )
    # }}}


def submit(composer: ComposerState, args: Arguments,
           state: RenderState, transport: callable = send_request
           ) -> list[str]:
    """
    Assembles the request, checks it against the
    submit policy and hands it to the transport.
    Returns the lines for the response section.
    """
    # submit {{{
    _, right = split_columns(state)
    width = right - 2

    request = assemble(composer.uri_field, composer.payload_fields(),
                       args.method)

    problems = check_request(request, args.policy)
    if len(problems) > 0:
        return populate_response_error("\n".join(problems), width)

    try:
        response = transport(request, args.timeout)
    except TransportError as exception:
        return populate_response_error(str(exception), width)

    return populate_response(response, width)
    # }}}


def validate_colors(key: str, color: str, mode: ColorMode) -> str:
    """
    We may be expecting an integer value or an array depending
    on the color mode. This validates the expected format.
    """
    # validate_colors {{{
    if mode == ColorMode.Bit24:
        split = color.split(",")
        if len(split) != 3 or not all(s.strip().isdigit() for s in split):
            raise Exception(f"Invalid RGB color format for {key}={color}")
        else:
            return ",".join(s.strip() for s in split)
    else:
        try:
            int(color)
            return color
        except ValueError:
            raise Exception(f"Color must be an integer for {key}={color}")
    # }}}


if __name__ == "__main__":
    main()
