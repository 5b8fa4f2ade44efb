"""UI Manager for the property survey app - builds and refreshes the form screen."""
import asyncio
import logging

import toga
from toga.style import Pack
from toga.style.pack import COLUMN, ROW

from shared.enums import (
    BlockPosition, Coverage, FieldId, Floors, NoticeKind, Pavement, Topography, YesNo,
)
from shared.schemas import MAX_PHOTOS
from shared.visibility import visible_fields
from .services.photo_service import make_thumbnail
from .ui.widgets import LabeledInput, RadioGroup, TabSelector, create_button, create_label, set_shown

# (field, label, placeholder)
TEXT_FIELDS = [
    (FieldId.PRICE, 'Preço (R$)', 'Ex: 350.000,00'),
    (FieldId.PHONE, 'Telefone', '(00) 00000-0000'),
    (FieldId.INFORMANT_NAME, 'Informante', 'Nome'),
    (FieldId.LOT_AREA, 'Área lote (m²)', 'Ex: 300'),
    (FieldId.BUILT_AREA, 'Área constr. (m²)', 'Ex: 80'),
    (FieldId.FRONTAGE, 'Testada (m)', 'Ex: 10'),
    (FieldId.CONDO_FEE, 'Taxa de Condomínio (R$)', 'Ex: 500,00'),
]

# (field, label, options)
CHOICE_FIELDS = [
    (FieldId.BLOCK_POSITION, 'Situação de Quadra', list(BlockPosition)),
    (FieldId.TOPOGRAPHY, 'Topografia', list(Topography)),
    (FieldId.IS_WALLED, 'Murado', list(YesNo)),
    (FieldId.FLOORS, 'Andares', list(Floors)),
    (FieldId.PAVEMENT, 'Pavimentação', list(Pavement)),
    (FieldId.HAS_POOL, 'Piscina', list(YesNo)),
    (FieldId.COVERAGE, 'Tipo de Cobertura', list(Coverage)),
]

NO_LOCATION_TEXT = 'Nenhuma localização capturada'


class UIManager:
    """Builds the survey form and keeps it in sync with the form state."""

    def __init__(self, app):
        self.app = app
        self.main_window = None
        self.logger = logging.getLogger(self.__class__.__name__)
        self._init_ui_components()

    def _init_ui_components(self):
        """Initialize UI component references."""
        self.tab_selector = None
        self.scroll_container = None
        self.field_widgets = {}
        self.location_label = None
        self.location_button = None
        self.location_box = None
        self.photos_label = None
        self.photos_box = None
        self.photo_preview_box = None
        self.submit_button = None
        self.status_label = None
        self._preview_cache = {}
        self._dialog_tasks = set()

    def create_main_ui(self):
        """Create the form screen and attach it to the main window."""
        handler = self.app.form_handler

        header = toga.Box(
            children=[
                create_label('CARPINA', {'font_size': 20, 'font_weight': 'bold', 'padding': (10, 10, 0, 10)}),
                create_label('Observatório de Valores', {'font_size': 10, 'color': '#666666'}),
            ],
            style=Pack(direction=COLUMN),
        )

        self.tab_selector = TabSelector(self.app.state.active_type, on_change=self.on_tab_change)

        form_box = toga.Box(style=Pack(direction=COLUMN, padding=10))

        for field_id, label, placeholder in TEXT_FIELDS:
            widget = LabeledInput(
                label,
                placeholder=placeholder,
                on_change=lambda value, f=field_id: handler.update_field(f, value),
            )
            self.field_widgets[field_id] = widget
            form_box.add(widget)

        for field_id, label, options in CHOICE_FIELDS:
            widget = RadioGroup(
                label,
                options,
                on_change=lambda value, f=field_id: handler.update_field(f, value),
            )
            self.field_widgets[field_id] = widget
            form_box.add(widget)

        # GPS section
        self.location_label = create_label(NO_LOCATION_TEXT, {'flex': 1, 'color': '#666666'})
        self.location_button = create_button('Capturar Localização', handler.capture_location)
        self.location_box = toga.Box(
            children=[
                create_label('Coordenadas GPS', {'font_weight': 'bold'}),
                toga.Box(children=[self.location_label, self.location_button], style=Pack(direction=ROW)),
            ],
            style=Pack(direction=COLUMN, padding=(10, 0)),
        )
        self.field_widgets[FieldId.LOCATION] = self.location_box
        form_box.add(self.location_box)

        # Photo section
        self.photos_label = create_label(self._photos_caption(0), {'font_weight': 'bold'})
        self.photo_preview_box = toga.Box(style=Pack(direction=ROW, padding=(5, 10)))
        self.photos_box = toga.Box(
            children=[
                self.photos_label,
                toga.Box(
                    children=[
                        create_button('Tirar Foto', handler.take_photo, {'flex': 1}),
                        create_button('Galeria', handler.choose_photos, {'flex': 1}),
                    ],
                    style=Pack(direction=ROW),
                ),
                self.photo_preview_box,
            ],
            style=Pack(direction=COLUMN, padding=(10, 0)),
        )
        self.field_widgets[FieldId.PHOTOS] = self.photos_box
        form_box.add(self.photos_box)

        self.scroll_container = toga.ScrollContainer(content=form_box, horizontal=False, style=Pack(flex=1))

        self.submit_button = create_button('Enviar para Planilha', handler.submit, {'font_weight': 'bold'})
        self.status_label = create_label('', {'color': '#666666'})

        self.main_window.content = toga.Box(
            children=[header, self.tab_selector, self.scroll_container, self.status_label, self.submit_button],
            style=Pack(direction=COLUMN),
        )
        self.refresh()

    def on_tab_change(self, property_type):
        self.app.form_handler.select_property_type(property_type)
        if self.scroll_container is not None:
            self.scroll_container.vertical_position = 0

    def apply_visibility(self, property_type):
        """Show the fields used by a property type and hide the rest."""
        shown = visible_fields(property_type)
        for field_id, widget in self.field_widgets.items():
            set_shown(widget, field_id in shown)

    def refresh(self):
        """Push the current form state into the widgets."""
        state = self.app.state
        record = state.record

        if self.tab_selector is not None:
            self.tab_selector.current = state.active_type
        self.apply_visibility(state.active_type)

        for field_id, _, _ in TEXT_FIELDS + CHOICE_FIELDS:
            widget = self.field_widgets.get(field_id)
            if widget is None:
                continue
            value = getattr(record, field_id.value)
            if widget.value != value:
                widget.value = value

        if self.location_label is not None:
            self.location_label.text = self._location_text(record)
        if self.location_button is not None:
            self.location_button.text = 'Buscando...' if state.is_capturing_location else 'Capturar Localização'
            self.location_button.enabled = state.is_idle

        if self.photos_label is not None:
            self.photos_label.text = self._photos_caption(len(record.photos))
        if self.photo_preview_box is not None:
            self._render_photo_previews(record.photos)

        if self.submit_button is not None:
            self.submit_button.text = 'Enviando...' if state.is_submitting else 'Enviar para Planilha'
            self.submit_button.enabled = state.is_idle

    @staticmethod
    def _location_text(record):
        if not record.has_location:
            return NO_LOCATION_TEXT
        return f"Lat: {record.latitude:.6f}\nLong: {record.longitude:.6f}"

    @staticmethod
    def _photos_caption(count):
        return f"Fotos do Imóvel ({count}/{MAX_PHOTOS})"

    def _render_photo_previews(self, photos):
        for child in list(self.photo_preview_box.children):
            self.photo_preview_box.remove(child)

        size = self.app.config.photo_thumbnail_size
        cache = {}
        for photo in photos:
            key = id(photo)
            thumb = self._preview_cache.get(key) or make_thumbnail(photo, max_size=size)
            cache[key] = thumb
            if thumb:
                view = toga.ImageView(toga.Image(thumb), style=Pack(width=size, height=size, padding=5))
            else:
                view = toga.Box(style=Pack(width=size, height=size, padding=5, background_color='#cccccc'))
            self.photo_preview_box.add(view)
        self._preview_cache = cache

    def show_notice(self, notice):
        """Show a message on the status line and as a dialog."""
        if self.status_label is not None:
            self.status_label.text = notice.message
        if self.main_window is None:
            return

        if notice.kind is NoticeKind.ERROR:
            dialog = toga.ErrorDialog('Atenção', notice.message)
        else:
            dialog = toga.InfoDialog('Aviso', notice.message)
        task = asyncio.ensure_future(self.main_window.dialog(dialog))
        self._dialog_tasks.add(task)
        task.add_done_callback(self._dialog_closed)

    def _dialog_closed(self, task):
        self._dialog_tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self.logger.error(f"Failed to show dialog: {error}")
