from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from lunar_coiner import __version__ as VERSION
from lunar_coiner.core import commands
from lunar_coiner.core.paths import PathResolver
from lunar_coiner.core.paths.root_providers import default_providers
from lunar_coiner.utils.path_utils import PathUtils
from lunar_coiner.utils.platform_utils import PlatformUtils
from lunar_coiner.utils.status import Status
from lunar_coiner.utils.translator import tr

# Spin boxes are bounded by Qt's signed 32-bit int
MAX_COINS = 2**31 - 1


class LunarCoinerWindow(QMainWindow):
    """Profile picker and coin editor."""

    def __init__(self, settings_manager):
        super().__init__()
        self.settings_manager = settings_manager
        self.resolver = PathResolver(
            default_providers(settings_manager=settings_manager)
        )
        self.current_path: str | None = None
        self.loaded_coins = 0
        self.loaded_total = 0
        self.suggested_total = 0
        self.init_ui()
        self.refresh_profiles()
        self._restore_last_profile()

    def init_ui(self):
        self.setWindowTitle(f"{tr('app_title')} {VERSION}")
        self.setMinimumSize(560, 460)
        self.setStyleSheet("""
            QMainWindow, QWidget { background-color: #1e1e1e; color: #ffffff; }
            QListWidget { background-color: #252525; border: 1px solid #3d3d3d; }
            QPushButton {
                background-color: #2d2d2d; border: 1px solid #3d3d3d;
                padding: 8px 14px; border-radius: 4px;
            }
            QPushButton:hover { background-color: #3d3d3d; }
            QPushButton:disabled { color: #555555; }
            #SaveButton { background-color: #0078d4; border: none; font-weight: bold; }
            #SaveButton:hover { background-color: #005a9e; }
            #HeaderLabel { font-size: 16px; font-weight: bold; }
            #PathLabel { color: #aaaaaa; }
        """)

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(12)

        header = QLabel(tr("select_profile_header"))
        header.setObjectName("HeaderLabel")
        layout.addWidget(header)

        self.profile_list = QListWidget()
        self.profile_list.itemClicked.connect(self.on_profile_clicked)
        layout.addWidget(self.profile_list)

        self.empty_label = QLabel(tr("no_profiles_found"))
        self.empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.empty_label)

        discovery_row = QHBoxLayout()
        refresh_button = QPushButton(tr("refresh_button"))
        refresh_button.clicked.connect(self.refresh_profiles)
        discovery_row.addWidget(refresh_button)
        import_button = QPushButton(tr("import_button"))
        import_button.clicked.connect(self.import_profile)
        discovery_row.addWidget(import_button)
        paths_button = QPushButton(tr("search_paths_button"))
        paths_button.clicked.connect(self.show_search_paths)
        discovery_row.addWidget(paths_button)
        discovery_row.addStretch()
        layout.addLayout(discovery_row)

        self.path_label = QLabel(tr("no_profile_selected"))
        self.path_label.setObjectName("PathLabel")
        self.path_label.setWordWrap(True)
        layout.addWidget(self.path_label)

        edit_row = QHBoxLayout()
        edit_row.addWidget(QLabel(tr("coins_label")))
        self.coins_spin = QSpinBox()
        self.coins_spin.setRange(0, MAX_COINS)
        self.coins_spin.valueChanged.connect(self.on_coins_changed)
        edit_row.addWidget(self.coins_spin)
        edit_row.addWidget(QLabel(tr("total_label")))
        self.total_spin = QSpinBox()
        self.total_spin.setRange(0, MAX_COINS)
        edit_row.addWidget(self.total_spin)
        edit_row.addStretch()
        layout.addLayout(edit_row)

        action_row = QHBoxLayout()
        self.open_folder_button = QPushButton(tr("open_backup_folder_button"))
        self.open_folder_button.clicked.connect(self.open_profile_folder)
        action_row.addWidget(self.open_folder_button)
        action_row.addStretch()
        self.save_button = QPushButton(tr("save_button"))
        self.save_button.setObjectName("SaveButton")
        self.save_button.clicked.connect(self.save_current)
        action_row.addWidget(self.save_button)
        layout.addLayout(action_row)

        self.setCentralWidget(central)
        self._set_editing_enabled(False)

    def _set_editing_enabled(self, enabled: bool):
        for widget in (
            self.coins_spin,
            self.total_spin,
            self.save_button,
            self.open_folder_button,
        ):
            widget.setEnabled(enabled)

    def refresh_profiles(self):
        self.profile_list.clear()
        profiles = commands.list_profiles(self.resolver)
        for profile in profiles:
            item = QListWidgetItem(
                tr(
                    "profile_list_item",
                    identifier=profile.identifier,
                    name=profile.display_name,
                    coins=profile.coins,
                )
            )
            item.setData(Qt.ItemDataRole.UserRole, profile.path)
            item.setToolTip(profile.path)
            self.profile_list.addItem(item)
        self.empty_label.setVisible(not profiles)

    def _restore_last_profile(self):
        last = self.settings_manager.get("last_profile_path")
        if last and PathUtils.is_file(last):
            self.load_path(last)

    def on_profile_clicked(self, item: QListWidgetItem):
        self.load_path(item.data(Qt.ItemDataRole.UserRole))

    def import_profile(self):
        start_dir = str(Path(self.current_path).parent) if self.current_path else ""
        selected, _ = QFileDialog.getOpenFileName(
            self, tr("import_dialog_title"), start_dir, tr("import_dialog_filter")
        )
        if selected:
            self.load_path(selected)

    def load_path(self, path: str):
        fields, error = commands.load_profile(path)
        if fields is None:
            QMessageBox.warning(self, tr("load_failed_title"), error)
            return

        self.current_path = path
        self.loaded_coins = fields.coins
        self.loaded_total = fields.total_collected
        self.suggested_total = min(fields.total_collected, MAX_COINS)
        self.path_label.setText(
            f"{fields.display_name}  |  {PathUtils.normalize(path)}"
        )

        self.coins_spin.blockSignals(True)
        self.coins_spin.setValue(min(fields.coins, MAX_COINS))
        self.coins_spin.blockSignals(False)
        self.total_spin.setValue(min(fields.total_collected, MAX_COINS))
        self._set_editing_enabled(True)
        self.settings_manager.set("last_profile_path", path)

    def on_coins_changed(self, value: int):
        suggested = min(
            commands.suggest_total(self.loaded_coins, self.loaded_total, value),
            MAX_COINS,
        )
        self.total_spin.setValue(
            commands.follow_total(
                self.total_spin.value(), self.suggested_total, suggested
            )
        )
        self.suggested_total = suggested

    def save_current(self):
        if not self.current_path:
            return
        coins = self.coins_spin.value()
        total = self.total_spin.value()
        status, message = commands.save_profile(self.current_path, coins, total)
        if Status.is_success(status):
            self.loaded_coins = coins
            self.loaded_total = total
            self.suggested_total = total
            QMessageBox.information(self, tr("save_succeeded_title"), message)
            self.refresh_profiles()
        else:
            QMessageBox.critical(self, tr("save_failed_title"), message)

    def show_search_paths(self):
        lines = commands.debug_search_paths(self.resolver)
        QMessageBox.information(self, tr("search_paths_title"), "\n".join(lines))

    def open_profile_folder(self):
        if self.current_path:
            PlatformUtils.open_dir(self.current_path)
