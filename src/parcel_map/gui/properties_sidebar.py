"""
Sidebar listing the properties visible on the map.
"""

import logging
from typing import Iterable, Optional

import qtawesome as qta  # type: ignore
from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from ..properties.models import OperationType, PropertyRecord
from ..properties.service import PropertyFilters


def format_listing(record: PropertyRecord) -> str:
    """One-line summary shown in the list."""
    price = f"{record.currency} {record.price:,.0f}"
    parts = [record.title or record.id, price, record.operation_type.value.title()]
    if record.rooms:
        parts.append(f"{record.rooms} rooms")
    if record.city:
        parts.append(record.city)
    return " · ".join(parts)


class PropertiesSidebar(QWidget):
    """List of listings with filter controls.

    Emits propertySelected when the user picks a listing, filtersChanged
    when the filter controls change and featuredToggled when the featured
    button switches between in-view and featured listings.
    """

    propertySelected = Signal(str)
    filtersChanged = Signal(object)
    featuredToggled = Signal(bool)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._is_updating = False
        self._selected_id: Optional[str] = None

        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)

        filter_row = QHBoxLayout()
        self.operation_combo = QComboBox()
        self.operation_combo.addItem("Any operation", None)
        for operation in OperationType:
            self.operation_combo.addItem(operation.value.title(), operation.value)
        self.operation_combo.currentIndexChanged.connect(self._on_filters_changed)
        filter_row.addWidget(self.operation_combo)

        self.rooms_spin = QSpinBox()
        self.rooms_spin.setRange(0, 20)
        self.rooms_spin.setPrefix("Rooms ≥ ")
        self.rooms_spin.setSpecialValueText("Any rooms")
        self.rooms_spin.valueChanged.connect(self._on_filters_changed)
        filter_row.addWidget(self.rooms_spin)

        self.featured_button = QPushButton(qta.icon("mdi.star"), "Featured")
        self.featured_button.setCheckable(True)
        self.featured_button.setToolTip("Show featured listings instead of the ones in view")
        self.featured_button.toggled.connect(self.featuredToggled.emit)
        filter_row.addWidget(self.featured_button)
        layout.addLayout(filter_row)

        self.header_label = QLabel("No listings in view")
        layout.addWidget(self.header_label)

        self.list_widget = QListWidget()
        self.list_widget.currentItemChanged.connect(self._on_current_item_changed)
        layout.addWidget(self.list_widget)

    def filters(self) -> PropertyFilters:
        """Filters described by the current state of the controls."""
        rooms = self.rooms_spin.value()
        operation = self.operation_combo.currentData()
        return PropertyFilters(
            operation_type=OperationType(operation) if operation else None,
            min_rooms=rooms or None,
        )

    def _on_filters_changed(self, _value: int) -> None:
        filters = self.filters()
        self.logger.debug(f"Sidebar filters changed: {filters}")
        self.filtersChanged.emit(filters)

    def set_properties(self, records: Iterable[PropertyRecord], limit: int, featured: bool = False) -> None:
        """Show up to ``limit`` listings, keeping the current selection if possible."""
        records = list(records)

        self._is_updating = True
        try:
            self.list_widget.clear()
            for record in records[:limit]:
                item = QListWidgetItem(format_listing(record))
                item.setData(Qt.ItemDataRole.UserRole, record.id)
                self.list_widget.addItem(item)
            self._highlight(self._selected_id)
        finally:
            self._is_updating = False

        shown = min(len(records), limit)
        if featured:
            self.header_label.setText(f"{shown} featured listings" if shown else "No featured listings")
        elif not records:
            self.header_label.setText("No listings in view")
        elif shown < len(records):
            self.header_label.setText(f"Showing {shown} of {len(records)} listings in view")
        else:
            self.header_label.setText(f"{shown} listings in view")

    def set_current(self, property_id: Optional[str]) -> None:
        """Select a listing without emitting propertySelected.

        The selection is remembered and re-highlighted whenever the list is
        refilled, even if the listing is not currently in view.
        """
        self._selected_id = property_id
        self._highlight(property_id)

    def _highlight(self, property_id: Optional[str]) -> None:
        was_updating, self._is_updating = self._is_updating, True
        try:
            for row in range(self.list_widget.count()):
                item = self.list_widget.item(row)
                if item.data(Qt.ItemDataRole.UserRole) == property_id:
                    self.list_widget.setCurrentItem(item)
                    return
            self.list_widget.setCurrentItem(None)  # type: ignore[arg-type]
        finally:
            self._is_updating = was_updating

    def current_property_id(self) -> Optional[str]:
        return self._selected_id

    def _on_current_item_changed(
        self, current: Optional[QListWidgetItem], _previous: Optional[QListWidgetItem]
    ) -> None:
        if self._is_updating or current is None:
            return
        property_id = current.data(Qt.ItemDataRole.UserRole)
        self._selected_id = property_id
        self.logger.debug(f"Listing selected in sidebar: {property_id}")
        self.propertySelected.emit(property_id)
