"""
Herald command layer: declare a command's arguments and options and bind values.

What this module provides
- Command: the record a host program declares against.
  • arguments("<source> [dest...]") compiles positional descriptors.
  • option("-c, --count <n>", "how many", int, 1) registers an option, its
    default and the handler that binds later occurrences.
  • subscribe()/publish() expose the command-owned event dispatcher that an
    external tokenizer drives once it recognized a flag.
  • values is a live read-only view of the bound values, keyed by camelCase
    option name.
  • Declarative setters (description, alias, hide, action, init, delimiter,
    after, usage) and child commands.
  • Help rendering through Rich (option_help, help_information, help).

Quick start
    from herald import Command

    tool = Command("copy")
    tool.arguments("<source> [dest...]")
    tool.option("-f, --force", "overwrite existing files")
    tool.option("--no-color", "disable colors")
    tool.option("-c, --count <n>", "copies to make", int, 1)

    # an external tokenizer saw: copy a.txt --count 3 --no-color
    tool.publish("count", "3")
    tool.publish("color", None)

    tool.values["count"]  # 3
    tool.values["color"]  # False

Styling
- Define a mapping named __styles__ in __main__ to override any palette entry.
- colorful=False strips styles; fancy=True wraps help in a Panel.
"""
from collections import defaultdict

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .arguments import DescriptorType, humanize, parse_arguments
from .events import Emitter
from .faults import FaultCode, ModeRequiredError, trigger
from .options import bind_option
from .utils import *
from .values import ValueStore


def _attach_to_parent(self, parent):
    """
    Register this command under its parent, enforcing unique names.
    """
    if parent._commands.setdefault(name := self.name, self) is self:
        return
    typeof = "subcommand" if parent.parent else "command"
    raise ValueError(f"{type(self).__typename__} {typeof} name {name!r} is already in use")


class Command(metaclass=DescriptorType):
    """
    Declarative command record.

    Owns two ordered lists (cardinals, options), a value store, an event
    dispatcher, and a few pieces of help metadata. Every collection is exposed
    as a read-only snapshot; the value store is exposed as a live read-only view.

    Lifecycle
    - Constructed with a name and optionally a parent (children are attached
      to their parent under their name).
    - shell/fancy/colorful default to the parent's settings, then to
      shell=False, fancy=False, colorful=True.
    """

    __introspectable__ = (
        "name",
        "descr",
        "aliases",
        "cardinals",
        "options",
        "values",
        "parent",
        "commands",
        "mode",
        "hidden",
        "prompt",
        "callback",
        "initializer",
        "finalizer",
        "shell",
        "fancy",
        "colorful",
    )

    __displayable__ = (
        "name",
        "descr",
        "aliases",
        "cardinals",
        "options",
        "values",
        "commands",
        "mode",
        "hidden",
    )

    def __new__(cls, name, /, parent=Unset, *, mode=False, shell=Unset, fancy=Unset, colorful=Unset):
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} 'name' must be a string")
        elif not (name := name.strip()):
            raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
        if not isinstance(parent, Command | Unset):
            raise TypeError(f"{cls.__typename__} 'parent' must be a command")

        self = super().__new__(cls)
        self._name = name
        self._parent = coalesce(parent)
        self._commands = {}
        self._cardinals = []
        self._options = []
        self._aliases = []
        self._values = ValueStore()
        self._events = Emitter()
        self._descr = None
        self._usage = None
        self._mode = bool(mode)
        self._hidden = False
        self._prompt = None
        self._callback = None
        self._initializer = None
        self._finalizer = None
        self._shell = bool(coalesce(shell, parent.shell if parent else False))
        self._fancy = bool(coalesce(fancy, parent.fancy if parent else False))
        self._colorful = bool(coalesce(colorful, parent.colorful if parent else True))

        if parent:
            _attach_to_parent(self, parent)
        return self

    @property
    def root(self):
        """
        Return the topmost command in the current command hierarchy.
        """
        child, parent = self, self.parent
        while parent:
            child, parent = parent, parent.parent
        return child

    @property
    def path(self):
        """
        Return the full ancestry from root to this command as a tuple.
        """
        path = [command := self]
        while command.parent:
            path.append(command := command.parent)
        return tuple(reversed(path))

    def command(self, name, /, **options):
        """
        Create a child command under this one and return it.
        """
        return Command(name, self, **options)

    def arguments(self, descriptor, /):
        """
        Append the positional arguments described by descriptor (e.g. "<source> [dest...]").

        Malformed tokens are dropped. Returns None: this call does not chain.
        """
        self._cardinals.extend(parse_arguments(descriptor))

    def option(self, flags, description=Unset, coerce=Unset, default=Unset):
        """
        Register an option and the handler binding its later occurrences.

        Parameters
        - flags: raw flags string ("-c, --count <n>", "--no-color", "-v, --verbose").
        - description: help text.
        - coerce: coercion function, compiled regular expression, or the default value.
        - default: default value when coerce is a function or a pattern.

        Returns None: this call does not chain.
        """
        bind_option(self, flags, description, coerce, default)

    def lookup(self, token, /):
        """
        Return the first registered option named by a command-line token, or None.
        """
        for option in self._options:
            if option.matches(token):
                return option
        return None

    def subscribe(self, event, handler, /):
        self._events.subscribe(event, handler)

    def publish(self, event, value=None, /):
        """
        Fire an event on this command; value None means "flag given without a value".

        Returns True when at least one handler ran.
        """
        return self._events.publish(event, value)

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this command's runtime options merged in.
        """
        if (
                not hasattr(fault, "__trigger__") or
                not callable(fault.__trigger__) or
                not hasattr(fault, "__replace__") or
                not callable(fault.__replace__)
        ):
            raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
        trigger(fault, **options, tool=self, shell=self.shell, fancy=self.fancy, colorful=self.colorful)

    def description(self, text=Unset, /):
        """
        Return the description when called without argument, otherwise set it.
        """
        if text is Unset:
            return self._descr
        if not isinstance(text, str | Text):
            raise TypeError("description() argument must be a string")
        self._descr = text
        return self

    def alias(self, name, /):
        if not isinstance(name, str):
            raise TypeError("alias() argument must be a string")
        self._aliases.append(name)
        return self

    def hide(self):
        """
        Keep this command out of help listings.
        """
        self._hidden = True
        return self

    def action(self, callback, /):
        if not callable(callback):
            raise TypeError("action() argument must be callable")
        self._callback = callback
        return self

    def init(self, callback, /):
        """
        Set the hook run when entering this mode command.

        Only mode commands accept an init hook; others trigger ModeRequiredError.
        """
        if not self.mode:
            self.trigger(ModeRequiredError(
                f"command {self.name!r} is not a mode command",
                code=FaultCode.MODE_REQUIRED,
                title="mode required",
                hint="create the command with mode=True to give it an init hook",
            ))
            return self
        if not callable(callback):
            raise TypeError("init() argument must be callable")
        self._initializer = callback
        return self

    def delimiter(self, text, /):
        """
        Set the prompt delimiter shown once this mode is entered.
        """
        if not isinstance(text, str):
            raise TypeError("delimiter() argument must be a string")
        self._prompt = text
        return self

    def after(self, callback, /):
        """
        Set the hook run after the action completes (non-callables are ignored).
        """
        if callable(callback):
            self._finalizer = callback
        return self

    def usage(self, text=Unset, /):
        """
        Return the usage line when called without argument, otherwise set it.

        The synthesized usage is "[options]", then " [command]" when the
        command has children, then the expected arguments.
        """
        if text is Unset:
            if self._usage is not None:
                return self._usage
            return " ".join((
                "[options]",
                *(("[command]",) if self._commands else ()),
                *map(humanize, self._cardinals),
            ))
        if not isinstance(text, str):
            raise TypeError("usage() argument must be a string")
        self._usage = text
        return self

    def _styler(self):
        """
        Build the (styler, text) pair used by the help renderers.

        Palette keys
        - usage-label, program-name, usage-section, description-section
        - alias-label, alias
        - options-label, option-flags, option-description
        """
        styles = defaultdict(str, {
            "usage-label": "bold #00E6FF",  # CYAN → signature info color
            "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
            "usage-section": "bold #36C5F0",  # SKY-BLUE → softer than cyan
            "description-section": "italic #A3A3A3",  # Neutral gray

            "alias-label": "bold #FFFFFF",
            "alias": "bold #36C5F0",

            "options-label": "bold #FFFFFF",  # Pure white headers
            "option-flags": "bold #00E6FF",  # CYAN for options
            "option-description": "#9CA3AF",  # Muted gray
        } | getattr(__import__("__main__"), "__styles__", {}))

        def styler(style):
            return styles[style] if self.colorful else ""

        def text(fragment, style=""):
            if isinstance(fragment, Text):
                return fragment if self.colorful else Text(fragment.plain)
            return Text(str(fragment), styler(style))

        return styler, text

    def option_help(self):
        """
        Render one line per option: flags padded to the widest flags, then the description.

        A "-h, --help" line always comes first.
        """
        _, text = self._styler()
        width = max((len(option.flags) for option in self._options), default=0)
        lines = [("-h, --help", "output usage information")]
        lines.extend((option.flags, option.description) for option in self._options)
        return Text("\n").join(
            Text.assemble(
                text(flags.ljust(width), "option-flags"),
                "  ",
                text(description, "option-description"),
            )
            for flags, description in lines
        )

    def help_information(self):
        """
        Render the full help block (usage, aliases, description, options) as Rich Text.
        """
        _, text = self._styler()
        lines = [
            Text(""),
            Text.assemble(
                "  ",
                text("Usage:", "usage-label"),
                " ",
                text(self.name, "program-name"),
                " ",
                text(self.usage(), "usage-section"),
            ),
            Text(""),
        ]
        # the alias slot is always present; it is an empty line without aliases
        lines.append(Text.assemble(
            "  ",
            text("Alias:", "alias-label"),
            " ",
            Text(" | ").join(text(alias, "alias") for alias in self._aliases),
            "\n",
        ) if self._aliases else Text(""))
        if self._descr:
            lines.extend((Text.assemble("  ", text(self._descr, "description-section")), Text("")))
        options = Text("\n").join(Text.assemble("    ", line) for line in self.option_help().split("\n"))
        lines.extend((Text.assemble("  ", text("Options:", "options-label")), Text(""), options, Text("")))
        return Text("\n").join(lines)

    def help(self, console=Unset, /):
        """
        Print the help block, wrapped in a Panel when fancy is enabled.
        """
        console = Console() if console is Unset else console
        information = self.help_information()
        if self.fancy:
            console.print(Panel(information, title=Text(self.name), title_align="left"))
        else:
            console.print(information)


__all__ = (
    "Command",
)
