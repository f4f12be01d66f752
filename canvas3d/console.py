"""Line-oriented console for a canvas.

Plain text becomes a module request; lines starting with ':' are commands.
The reader runs on its own thread so the render loop keeps the main one.
"""

import logging
import sys
import threading
from typing import Callable, Dict, Optional, TextIO

from canvas3d.core import Canvas

logger = logging.getLogger(__name__)

HELP_TEXT = """Type what you want on the canvas, e.g. "add a spinning red cube".

Commands:
  :list           show loaded modules
  :code <id>      show a module's code
  :unload <id>    remove a module and its event handlers
  :reset          remove every module
  :scene          show scene status
  :help           show this help
  :quit           exit"""


class Console:
    """Maps console lines to canvas operations."""

    def __init__(self, canvas: Canvas, output: TextIO = None):
        self.canvas = canvas
        self.output = output or sys.stdout
        self._commands: Dict[str, Callable[[str], Optional[bool]]] = {
            "list": self.list_command,
            "code": self.code_command,
            "unload": self.unload_command,
            "reset": self.reset_command,
            "scene": self.scene_command,
            "help": self.help_command,
            "quit": self.quit_command,
            "exit": self.quit_command,
        }

    def write(self, text: str):
        print(text, file=self.output, flush=True)

    def handle_line(self, line: str) -> bool:
        """
        Handle one input line.

        Returns:
            False when the console should stop
        """
        line = line.strip()
        if not line:
            return True

        if line.startswith(":"):
            name, _, arg = line[1:].partition(" ")
            handler = self._commands.get(name.lower())
            if handler is None:
                self.write(f"Unknown command :{name} (try :help)")
                return True
            return handler(arg.strip()) is not False

        result = self.canvas.submit_command(line)
        if result.success:
            self.write(f"✅ Loaded {result.module_id}")
        else:
            self.write(f"❌ Error: {result.error}")
        return True

    def list_command(self, arg: str):
        records = self.canvas.engine.run_on_loop(self.canvas.modules.list)
        if not records:
            self.write("No modules yet")
            return
        for record in records:
            self.write(f"{record.id}: {record.description}")

    def code_command(self, arg: str):
        record = self.canvas.engine.run_on_loop(self.canvas.modules.get, arg)
        if record is None:
            self.write(f"Module {arg!r} not found")
            return
        self.write(record.code)

    def unload_command(self, arg: str):
        if self.canvas.engine.run_on_loop(self.canvas.unload_module, arg):
            self.write(f"Unloaded {arg}")
        else:
            self.write(f"Module {arg!r} not found")

    def reset_command(self, arg: str):
        self.canvas.engine.run_on_loop(self.canvas.reset)
        self.write("Canvas reset")

    def scene_command(self, arg: str):
        canvas = self.canvas
        self.write(
            f"objects={len(canvas.scene.children)} modules={len(canvas.modules)} "
            f"handlers={canvas.events.listener_count()} frame={canvas.engine.frame}"
        )

    def help_command(self, arg: str):
        self.write(HELP_TEXT)

    def quit_command(self, arg: str):
        return False

    def read_loop(self, stream: TextIO = None):
        """Read lines until EOF or :quit, then stop the render loop."""
        stream = stream or sys.stdin
        self.write(HELP_TEXT)
        try:
            for line in stream:
                try:
                    if not self.handle_line(line):
                        break
                except Exception as e:
                    logger.error(f"Error handling console input {line!r}: {e}", exc_info=True)
                    self.write(f"❌ Error: {e}")
        finally:
            self.canvas.engine.stop()


def run_console(canvas: Canvas, stream: TextIO = None):
    """Run the console reader on a thread and the render loop on this one."""
    console = Console(canvas)
    reader = threading.Thread(target=console.read_loop, args=(stream,), name="canvas3d-console", daemon=True)
    reader.start()
    canvas.engine.run()
