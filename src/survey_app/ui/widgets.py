"""Form widgets for the property survey screen."""
import toga
from toga.style import Pack
from toga.style.pack import COLUMN, ROW

from shared.enums import PropertyType


def create_label(text, style_overrides=None):
    """Create a Label widget with default styling.

    Args:
        text: Label text
        style_overrides: Optional dict of style overrides

    Returns:
        toga.Label widget
    """
    default_style = Pack(padding=(5, 10, 5, 10))
    if style_overrides:
        default_style.update(**style_overrides)
    return toga.Label(text, style=default_style)


def create_button(text, on_press=None, style_overrides=None):
    """Create a Button widget with default styling."""
    default_style = Pack(padding=(5, 10, 10, 10))
    if style_overrides:
        default_style.update(**style_overrides)
    return toga.Button(text, on_press=on_press, style=default_style)


def set_shown(widget, shown):
    """Toggle a widget's visibility."""
    widget.style.visibility = 'visible' if shown else 'hidden'


class LabeledInput(toga.Box):
    """A caption above a single-line text input.

    on_change receives the new text whenever the agent edits the input.
    """

    def __init__(self, label, placeholder='', on_change=None, style_overrides=None):
        box_style = Pack(direction=COLUMN)
        if style_overrides:
            box_style.update(**style_overrides)
        super().__init__(style=box_style)

        self._on_change = on_change
        self.label = create_label(label)
        self.input = toga.TextInput(
            placeholder=placeholder,
            on_change=self._handle_change,
            style=Pack(padding=(0, 10, 10, 10)),
        )
        self.add(self.label, self.input)

    def _handle_change(self, widget, **kwargs):
        if self._on_change:
            self._on_change(widget.value)

    @property
    def value(self):
        return self.input.value

    @value.setter
    def value(self, text):
        self.input.value = text or ''


class RadioGroup(toga.Box):
    """Single choice among a fixed list of options.

    Toga has no radio button, so each option is a button and the selected
    one is marked. value is the selected option or None.
    """

    SELECTED = '●'
    UNSELECTED = '○'

    def __init__(self, label, options, on_change=None, style_overrides=None):
        box_style = Pack(direction=COLUMN, padding=(0, 0, 10, 0))
        if style_overrides:
            box_style.update(**style_overrides)
        super().__init__(style=box_style)

        self.options = list(options)
        self._on_change = on_change
        self._value = None

        self.label = create_label(label)
        self.buttons = {}
        row = toga.Box(style=Pack(direction=ROW, padding=(0, 5)))
        for option in self.options:
            button = toga.Button(
                self._caption(option, False),
                on_press=lambda w, o=option: self._select(o),
                style=Pack(flex=1, padding=5),
            )
            self.buttons[option] = button
            row.add(button)
        self.add(self.label, row)

    @staticmethod
    def _caption(option, selected):
        text = getattr(option, 'value', option)
        marker = RadioGroup.SELECTED if selected else RadioGroup.UNSELECTED
        return f"{marker} {text}"

    def _select(self, option):
        self.value = option
        if self._on_change:
            self._on_change(option)

    @property
    def value(self):
        return self._value

    @value.setter
    def value(self, option):
        self._value = option
        for candidate, button in self.buttons.items():
            button.text = self._caption(candidate, candidate == option)


class TabSelector(toga.Box):
    """Row of property type tabs. The active tab is upper-cased."""

    def __init__(self, current=PropertyType.LAND, on_change=None):
        super().__init__(style=Pack(direction=ROW, padding=(5, 5, 0, 5)))
        self._on_change = on_change
        self.tabs = {}
        for property_type in PropertyType:
            button = toga.Button(
                property_type.value,
                on_press=lambda w, t=property_type: self._select(t),
                style=Pack(flex=1, padding=2),
            )
            self.tabs[property_type] = button
            self.add(button)
        self.current = current

    def _select(self, property_type):
        self.current = property_type
        if self._on_change:
            self._on_change(property_type)

    @property
    def current(self):
        return self._current

    @current.setter
    def current(self, property_type):
        self._current = PropertyType(property_type)
        for candidate, button in self.tabs.items():
            active = candidate is self._current
            button.text = candidate.value.upper() if active else candidate.value
            button.style.font_weight = 'bold' if active else 'normal'
