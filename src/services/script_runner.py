"""
Script Runner - Executes batch command scripts against the editor service.

A script holds one command per line:

    load <file>
    load rainbow <width> <height> <true|false>
    load checkerboard <tile_size>
    save <file>
    blur | sharpen | greyscale | sepia | dither
    mosaic <seeds>
    undo | redo

Blank lines and lines starting with "//" are skipped. The first command
must be a load.
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional, Union

from common.enums import EffectType, PatternType
from common.exceptions import IllegalState, InvalidArgument, ScriptError
from services.editor_service import EditorService

logger = logging.getLogger(__name__)


def _parse_int(value: str, what: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise InvalidArgument(f"{what} must be an integer, got '{value}'")


def _parse_bool(value: str, what: str) -> bool:
    lowered = value.lower()
    if lowered not in ("true", "false"):
        raise InvalidArgument(f"{what} must be true or false, got '{value}'")
    return lowered == "true"


class ScriptRunner:
    """Parses and runs command scripts line by line"""

    def __init__(self, editor: EditorService, max_lines: Optional[int] = None):
        """
        Initialize runner

        Args:
            editor: Editor service the commands are sent to
            max_lines: Reject scripts longer than this (None = no limit)
        """
        if editor is None:
            raise InvalidArgument("Editor cannot be None")
        self.editor = editor
        self.max_lines = max_lines

        # Commands that take no arguments
        self._simple_commands: Dict[str, Callable[[], object]] = {
            EffectType.BLUR.value: editor.blur,
            EffectType.SHARPEN.value: editor.sharpen,
            EffectType.GREYSCALE.value: editor.greyscale,
            EffectType.SEPIA.value: editor.sepia,
            EffectType.DITHER.value: editor.dither,
            "undo": editor.undo,
            "redo": editor.redo,
        }

    def run(self, script: Union[str, Iterable[str]]) -> int:
        """
        Execute a script

        Args:
            script: Script text, or an iterable of lines (e.g. an open file)

        Returns:
            Number of commands executed

        Raises:
            ScriptError: If a line is malformed, the first command is not a
                load, a command is invalid in the current state, the
                script holds no commands, or it is longer than max_lines
            FileNotFoundError / ImageIOError: If a load or save fails
        """
        lines = script.splitlines() if isinstance(script, str) else script
        if isinstance(lines, list) and self.max_lines is not None and len(lines) > self.max_lines:
            raise ScriptError(0, "", f"script exceeds the {self.max_lines} line limit")

        executed = 0
        for line_number, raw in enumerate(lines, start=1):
            if self.max_lines is not None and line_number > self.max_lines:
                raise ScriptError(
                    line_number, raw, f"script exceeds the {self.max_lines} line limit"
                )

            tokens = raw.split()
            if not tokens or tokens[0].startswith("//"):
                continue

            command = tokens[0].lower()
            if executed == 0 and command != "load":
                raise ScriptError(line_number, raw, "load must be the first command in a script")

            try:
                self.execute(tokens)
            except (InvalidArgument, IllegalState) as e:
                raise ScriptError(line_number, raw, e.message) from e

            executed += 1
            logger.debug(f"Line {line_number}: {raw.strip()}")

        if executed == 0:
            raise ScriptError(0, "", "script has no commands")

        logger.info(f"Script finished: {executed} command(s) executed")
        return executed

    def execute(self, tokens: List[str]) -> None:
        """
        Execute one tokenized command

        Raises:
            InvalidArgument: If the command or its arguments are malformed
        """
        command = tokens[0].lower()
        args = tokens[1:]

        if command == "load":
            self._load(args)
        elif command == "save":
            if len(args) != 1:
                raise InvalidArgument("save takes exactly one file name")
            self.editor.save(args[0])
        elif command == EffectType.MOSAIC.value:
            if len(args) != 1:
                raise InvalidArgument("mosaic takes exactly one seed count")
            self.editor.mosaic(_parse_int(args[0], "Mosaic seed count"))
        elif command in self._simple_commands:
            if args:
                raise InvalidArgument(f"{command} takes no arguments")
            self._simple_commands[command]()
        else:
            raise InvalidArgument(f"Unrecognized command: {tokens[0]}")

    def _load(self, args: List[str]) -> None:
        if not args:
            raise InvalidArgument("load needs a file name or a pattern")

        source = args[0]
        if source.lower() == PatternType.RAINBOW.value:
            if len(args) != 4:
                raise InvalidArgument("usage: load rainbow <width> <height> <true|false>")
            self.editor.load_rainbow(
                _parse_int(args[1], "Rainbow width"),
                _parse_int(args[2], "Rainbow height"),
                _parse_bool(args[3], "Rainbow orientation"),
            )
        elif source.lower() == PatternType.CHECKERBOARD.value:
            if len(args) != 2:
                raise InvalidArgument("usage: load checkerboard <tile_size>")
            self.editor.load_checkerboard(_parse_int(args[1], "Checkerboard tile size"))
        else:
            if len(args) != 1:
                raise InvalidArgument("load from file takes exactly one file name")
            self.editor.load_file(source)
