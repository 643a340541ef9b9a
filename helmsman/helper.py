"""
Help listing for a registry, written line by line through an output sink.

Layout
    ****************************
    name: <name>
    author: <author>
    version: <version>
    *********** HELP ***********

    available commands:

     add: add two integers
      parameters:
        -a (int)
        -b (int) (default: 2)

     ping:
      this command does not take any parameters.

Banner lines whose metadata is unknown are left out; the banner itself is left out when
nothing is known. Palette keys (overridable through __styles__ in __main__):
banner, label, command-name, description, parameter-name, type-name, default, notice.
"""
from collections import defaultdict

from rich.text import Text


def render(registry, sink, metadata, /, *, colorful=False):
    """
    Write the help listing of `registry` to `sink` using `metadata` for the banner.
    """
    styles = defaultdict(str, {
        "banner": "bold #FF4D94",
        "label": "bold #FFFFFF",
        "command-name": "bold #36C5F0",
        "description": "italic #A3A3A3",
        "parameter-name": "bold #00E6FF",
        "type-name": "#FFD600",
        "default": "#9CA3AF",
        "notice": "#737373",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def text(fragment, style=""):
        return Text(str(fragment), styles[style] if colorful and style else "")

    banner = [
        (label, value) for label, value in (
            ("name", metadata.name()),
            ("author", metadata.author()),
            ("version", metadata.version()),
        ) if value
    ]
    if banner:
        sink.line(text("*" * 28, "banner"))
        for label, value in banner:
            sink.line(Text.assemble(text(label + ": ", "label"), text(value)))
    sink.line(text("*********** HELP ***********", "banner"))
    sink.line("")

    if not len(registry):
        sink.line(text("no commands are available.", "notice"))
        return

    sink.line(text("available commands:", "label"))
    sink.line("")
    for command in registry:
        header = Text.assemble(" ", text(command.name, "command-name"), ":")
        if command.descr:
            header.append_text(Text.assemble(" ", text(command.descr, "description")))
        sink.line(header)

        if not command.parameters:
            sink.line(text("  this command does not take any parameters.", "notice"))
        else:
            sink.line(text("  parameters:", "label"))
            for parameter in command.parameters:
                line = Text.assemble(
                    "    ",
                    text("-" + parameter.name, "parameter-name"),
                    " (", text(parameter.kind.value, "type-name"), ")",
                )
                if parameter.has_default:
                    line.append_text(text(" (default: %s)" % (parameter.default,), "default"))
                sink.line(line)
        sink.line("")


__all__ = (
    "render",
)
