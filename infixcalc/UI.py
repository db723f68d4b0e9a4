# UI.py
""""PySide6 user interface of the calculator.

Structure
---------
- CalculatorWindow: main window with display and button grid
- SettingsDialog: modal dialog for the values in config.json

Responsibilities (Calculator)
-----------------------------
- Build window, display, layout and buttons
- Handle button and keyboard input, keep an undo stack
- Dispatch the expression to MathEngine in a worker thread
- Render results and show MathEngine errors as dialogs, pointing at the
  offending character
- Clipboard: copy the display, or paste into it while Shift is held


Threading Note
--------------
Evaluation runs off the UI thread in Worker(QObject); the result (or the
error) comes back through a Qt signal and is handled in the UI thread.
"""""

from PySide6 import QtWidgets
from PySide6.QtCore import Qt, QObject, Signal
import sys
import threading
from pynput.keyboard import Controller
import pyperclip
from . import error as E  # Imports error.py as a module
from . import config_manager as config_manager  # Imports config_manager.py as a module
from . import MathEngine as MathEngine  # Imports MathEngine.py as a module

# Diagnostics on stdout while developing
debug = False

ENTER = "⏎"
SETTINGS = "⚙"
CLIPBOARD = "📋"
UNDO = "↶"
BACKSPACE = "<"

DARK_STYLE = "background-color: #121212; color: white; font-weight: bold;"
ENTER_STYLE = "background-color: #007bff; color: white; font-weight: bold;"
BUSY_STYLE = "background-color: #FF0000; color: white; font-weight: bold;"

# Limits the settings dialog enforces for integer values: (minimum, maximum)
INTEGER_LIMITS = {
    "precision": (2, 1000),
    "max_nesting_depth": (1, config_manager.NESTING_LIMIT),
    "decimal_places": (0, 100),
}


def is_shift_pressed():
    """""

    Small and simple check, whether shift is pressed or not.
    Used to switch the clipboard button from copy to paste.

    """""

    keyboard_controller = Controller()
    return keyboard_controller.shift_pressed


class Worker(QObject):
    """""

    Runs in a separate thread, hands the expression to MathEngine.py and emits
    job_finished(result_or_error, expression) back to the calculator window.

    """""

    job_finished = Signal(object, str)

    def __init__(self, problem, settings):
        super().__init__()
        self.data = problem
        self.settings = settings
        self.value = None  # exact Decimal result, used for Ans

    def run_Calc(self):

        try:
            # --- 1. Start Calculation ---
            self.value = MathEngine.evaluate(self.data, self.settings)
            result, _ = MathEngine.render(self.value, self.settings)

            # --- 2. Send Success Signal ---
            self.job_finished.emit(result, self.data)

        except E.MathError as e:
            # --- 3. Send Math Error Signal ---
            # A known error, e.g. "Division by zero" with its position
            self.job_finished.emit(e, self.data)

        except Exception as e:
            # --- 4. Send Critical Error Signal ---
            # An unexpected crash, i.e. a bug in the engine
            critical_error = E.MathError(
                message=f"Unexpected crash: {e}",
                code="9999",
                equation=self.data
            )
            self.job_finished.emit(critical_error, self.data)


class SettingsDialog(QtWidgets.QDialog):
    """""

    Lets the user edit config.json. Boolean settings become checkboxes,
    integer settings input fields validated against INTEGER_LIMITS.

    """""

    settings_saved = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.widgets = {}

        # --- 1. Window Setup ---
        self.setWindowTitle("Calculator Settings")
        self.setMinimumSize(320, 240)
        main_layout = QtWidgets.QVBoxLayout(self)

        # --- 2. Load Settings ---
        self.setting_value_list = config_manager.load_settings()
        self.setting_description_list = config_manager.load_setting_description("all")

        # --- 3. Build Widgets ---
        for key_value, value in self.setting_value_list.items():
            description = self.setting_description_list.get(key_value, key_value)

            if isinstance(value, bool):
                checkbox = QtWidgets.QCheckBox(description)
                checkbox.setChecked(value)
                main_layout.addWidget(checkbox)
                self.widgets[key_value] = checkbox

            elif MathEngine.isInt(value):
                low, high = INTEGER_LIMITS.get(key_value, (0, 10000))
                row_h_layout = QtWidgets.QHBoxLayout()
                main_layout.addLayout(row_h_layout)
                label = QtWidgets.QLabel(f"{description} ({low}-{high}):")
                input_field = QtWidgets.QLineEdit()
                input_field.setPlaceholderText(str(value))  # Show current value as placeholder
                row_h_layout.addWidget(label)
                row_h_layout.addWidget(input_field)
                row_h_layout.setStretch(1, 1)
                self.widgets[key_value] = input_field

        # --- 4. OK / Cancel Buttons ---
        button_box = QtWidgets.QDialogButtonBox(QtWidgets.QDialogButtonBox.Ok | QtWidgets.QDialogButtonBox.Cancel)
        main_layout.addWidget(button_box)
        button_box.accepted.connect(self.save_settings)
        button_box.rejected.connect(self.reject)

        self.setStyleSheet(dialog_stylesheet(self.setting_value_list["darkmode"]))

    def save_settings(self):
        new_settings = dict(self.setting_value_list)

        for key_value, widget in self.widgets.items():
            if isinstance(widget, QtWidgets.QCheckBox):
                new_settings[key_value] = widget.isChecked()
                continue

            text = widget.text().strip()
            if text == "":
                continue  # Left blank: keep the old value

            low, high = INTEGER_LIMITS.get(key_value, (0, 10000))
            try:
                new_value = int(text)
                if not low <= new_value <= high:
                    raise ValueError(f"'{new_value}' is outside {low}-{high}.")
            except ValueError as e:
                # Stop the save process, nothing is written
                QtWidgets.QMessageBox.critical(self, "Invalid Input:",
                                               f"Error in input for '{key_value}':\n\n{e}\n\nPlease correct your input.")
                return
            new_settings[key_value] = new_value

        if config_manager.save_setting(new_settings) != {}:
            self.settings_saved.emit()
            self.accept()
        else:
            headline = f"Error 4501: {E.ERROR_MESSAGES['4501']}"
            QtWidgets.QMessageBox.critical(self, "Error", headline)


def dialog_stylesheet(darkmode):
    if not darkmode:
        return ""
    return """
        QDialog, QMessageBox {background-color: #121212; color: white;}
        QLabel {color: white;}
        QCheckBox {color: white;}
        QLineEdit {background-color: #444444; color: white; border: 1px solid #666666;}
        QPushButton {background-color: #2e2e2e; color: white; border: 1px solid #444444; padding: 5px 15px;}"""


class CalculatorWindow(QtWidgets.QWidget):

    def __init__(self):
        super().__init__()

        # --- 1. Load Settings ---
        self.setting_value_list = config_manager.load_settings()

        # --- 2. Instance State ---
        self.display_text = "0"
        self.calculator_result = ""   # last result, without "= " / "≈ "
        self.thread_active = False
        self.undo = ["0"]
        self.button_objects = {}
        self.worker = None

        # --- 3. Window Setup ---
        self.setWindowTitle("Calculator")
        self.resize(420, 560)
        main_v_layout = QtWidgets.QVBoxLayout(self)

        expanding_policy = QtWidgets.QSizePolicy(
            QtWidgets.QSizePolicy.Policy.Expanding,
            QtWidgets.QSizePolicy.Policy.Expanding
        )

        # --- 4. Display ---
        self.display = QtWidgets.QLineEdit(self.display_text)
        self.display.setAlignment(Qt.AlignmentFlag.AlignRight)
        self.display.setReadOnly(True)
        font = self.display.font()
        font.setPointSize(28)
        self.display.setFont(font)
        main_v_layout.addWidget(self.display, 1)

        # --- 5. Button Grid ---
        button_container = QtWidgets.QWidget()
        main_v_layout.addWidget(button_container, 4)
        button_grid = QtWidgets.QGridLayout(button_container)
        button_grid.setSpacing(0)
        button_grid.setContentsMargins(0, 0, 0, 0)

        # (text, row, column)
        self.buttons = [
            (SETTINGS, 0, 0), (CLIPBOARD, 0, 1), (UNDO, 0, 2), (BACKSPACE, 0, 3), ('C', 0, 4),
            ('SIN(', 1, 0), ('COS(', 1, 1), ('TAN(', 1, 2), ('PI()', 1, 3), ('E()', 1, 4),
            ('SQRT(', 2, 0), ('ROOT(', 2, 1), ('LOG(', 2, 2), ('^', 2, 3), ('%', 2, 4),
            ('(', 3, 0), ('7', 3, 1), ('8', 3, 2), ('9', 3, 3), ('/', 3, 4),
            (')', 4, 0), ('4', 4, 1), ('5', 4, 2), ('6', 4, 3), ('*', 4, 4),
            (',', 5, 0), ('1', 5, 1), ('2', 5, 2), ('3', 5, 3), ('-', 5, 4),
            ('Ans', 6, 0), ('0', 6, 1), ('.', 6, 2), ('+', 6, 3), (ENTER, 6, 4)
        ]

        for text, row, col in self.buttons:
            button = QtWidgets.QPushButton(text)
            button.setSizePolicy(expanding_policy)
            button.clicked.connect(lambda checked=False, val=text: self.handle_button_press(val))
            button_grid.addWidget(button, row, col)
            self.button_objects[text] = button

        self.update_darkmode()

    # --- Input ---
    def keyPressEvent(self, event):
        if event.key() in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
            self.handle_button_press(ENTER)
        elif event.key() == Qt.Key.Key_Backspace:
            self.handle_button_press(BACKSPACE)
        elif event.key() == Qt.Key.Key_Escape:
            self.handle_button_press('C')
        elif event.text() and event.text().isprintable():
            self.handle_button_press(event.text())
        else:
            super().keyPressEvent(event)

    def handle_button_press(self, value):
        if self.thread_active and value != SETTINGS:
            if debug:
                print("ERROR: A calculation is already running!")  # 4002
            return

        if value == SETTINGS:
            self.open_settings()
            return

        elif value == ENTER:
            self.start_calculation(self.display_text)
            return

        elif value == CLIPBOARD:
            if is_shift_pressed():
                pasted = pyperclip.paste().strip()
                if pasted:
                    self.set_display(pasted if self.display_text == "0" else self.display_text + pasted)
                    if self.setting_value_list["after_paste_enter"]:
                        self.start_calculation(self.display_text)
            else:
                pyperclip.copy(self.display.text())
            return

        elif value == UNDO:
            if len(self.undo) > 1:
                self.undo.pop()
                self.display_text = self.undo[-1]
                self.display.setText(self.display_text)
            return

        elif value == BACKSPACE:
            new_text = self.display_text[:-1] or "0"

        elif value == 'C':
            new_text = "0"

        elif value == 'Ans':
            if self.calculator_result == "":
                self.show_error(E.CalculationError("No Value in ANS", code="4003"))
                return
            new_text = self.append_text(f"({self.calculator_result})")

        else:
            new_text = self.append_text(value)

        self.set_display(new_text)

    def append_text(self, value):
        if self.display_text == "0" and value not in ('.', '+', '-', '*', '/', '%', '^'):
            return value
        return self.display_text + value

    def set_display(self, text):
        self.display_text = text
        self.display.setText(text)
        if text != self.undo[-1]:
            self.undo.append(text)

    # --- Calculation ---
    def start_calculation(self, problem):
        self.thread_active = True
        self.update_return_button()
        self.display.setText("...")

        self.worker = Worker(problem, self.setting_value_list)
        self.worker.job_finished.connect(self.Calc_result)
        threading.Thread(target=self.worker.run_Calc, daemon=True).start()

    def Calc_result(self, result, equation):
        self.thread_active = False
        self.update_return_button()

        if isinstance(result, E.MathError):
            self.display.setText(equation)
            self.show_error(result)
            return

        # result is "= 14" or "≈ 0.3333333333"; Ans keeps every digit
        self.calculator_result = str(self.worker.value)
        self.set_display(result.split(" ", 1)[1])
        self.display.setText(f"{equation} {result}")
        if debug:
            print("undo: " + str(self.undo))

    def show_error(self, error):
        headline, details = E.describe(error)
        error_box = QtWidgets.QMessageBox(self)
        error_box.setIcon(QtWidgets.QMessageBox.Critical)
        error_box.setWindowTitle(E.category(error))
        error_box.setText(headline)
        error_box.setInformativeText(details)
        error_box.setStandardButtons(QtWidgets.QMessageBox.Ok)
        error_box.setStyleSheet(dialog_stylesheet(self.setting_value_list["darkmode"]))
        error_box.exec()

        # Point at the offending character when the display holds the same text
        if error.position is not None and error.equation == MathEngine.strip_whitespace(self.display.text()):
            self.display.setSelection(error.position, 1)

    # --- Look ---
    def update_return_button(self):
        return_button = self.button_objects.get(ENTER)
        if self.thread_active:
            return_button.setStyleSheet(BUSY_STYLE)
            return_button.setText("X")
        else:
            return_button.setStyleSheet(ENTER_STYLE)
            return_button.setText(ENTER)

    def update_darkmode(self):
        darkmode = self.setting_value_list["darkmode"]
        for text, button in self.button_objects.items():
            if text == ENTER:
                self.update_return_button()
            else:
                button.setStyleSheet(DARK_STYLE if darkmode else "font-weight: normal;")
        self.setStyleSheet("background-color: #121212;" if darkmode else "")
        self.display.setStyleSheet(DARK_STYLE if darkmode else "font-weight: bold;")

    def open_settings(self):
        settings_dialog = SettingsDialog(self)
        settings_dialog.exec()  # modal

        # Reload so changes (like darkmode or precision) apply to the next calculation
        self.setting_value_list = config_manager.load_settings()
        self.update_darkmode()


def main():
    # --- Main Application Entry Point ---
    app = QtWidgets.QApplication(sys.argv)
    window = CalculatorWindow()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
