import tkinter as tk
from tkinter import filedialog, messagebox, ttk
from PIL import ImageTk
from pathlib import Path
import sys
import ctypes
import logging
import os
import threading
import webbrowser
from typing import List, Optional

from PyPDF2.errors import PyPdfError

from pdfutils import cli
from pdfutils.encryption import check_result_password
from pdfutils.errors import InvalidInputError, InvalidPasswordError, OperationCancelled
from pdfutils.extract_images import ExtractImagesOptions, extract_to_images
from pdfutils.extract_pdf import ExtractPdfOptions, extract_to_pdf
from pdfutils.file_manager import (
    IMAGE_EXTS,
    add_images_to_list,
    collect_folder_images,
    describe_selection,
    is_pdf_readable,
    pdf_page_count,
    validate_output_name,
)
from pdfutils.images_to_pdf import ImagesToPdfOptions, images_to_pdf
from pdfutils.logging_setup import setup_logging
from pdfutils.operation import OperationRunner, is_operation_ongoing
from pdfutils.page_ops import format_page_list, page_range_to_indices, parse_page_bounds, parse_page_list
from pdfutils.preview import PageSelection, render_thumbnails
from pdfutils.settings import default_config_path, load_settings, save_settings

__VERSION__ = "1.2.0"

PROJECT_URL = "https://github.com/Gtomika/pdf-utils"

MODE_DESCRIPTIONS = {
    "images": "Extract pages from a PDF file. Every page becomes a separate PNG image.",
    "pdf": "Extract pages from a PDF file. The pages will be combined into a new PDF file.",
    "combine": "Combine images into a single PDF file, each image on its own page. "
               "Works best when the images are extracted PDF pages.",
}

logger = logging.getLogger("pdfutils.gui")


def _enable_dpi_awareness() -> None:
    if os.name != 'nt':
        return
    try:
        ctypes.windll.shcore.SetProcessDpiAwareness(2)
    except (AttributeError, OSError):
        try:
            ctypes.windll.user32.SetProcessDPIAware()
        except (AttributeError, OSError):
            pass


class ToolTip:
    """Create a tooltip for a given widget"""
    def __init__(self, widget, text):
        self.widget = widget
        self.text = text
        self.tooltip_window = None
        self.widget.bind("<Enter>", self.show_tooltip)
        self.widget.bind("<Leave>", self.hide_tooltip)

    def show_tooltip(self, event=None):
        if self.tooltip_window or not self.text:
            return
        x = self.widget.winfo_rootx() + 25
        y = self.widget.winfo_rooty() + 25

        self.tooltip_window = tw = tk.Toplevel(self.widget)
        tw.wm_overrideredirect(True)
        tw.wm_geometry(f"+{x}+{y}")

        label = tk.Label(tw, text=self.text, justify=tk.LEFT,
                         background="#ffffe0", relief=tk.SOLID, borderwidth=1,
                         font=("Arial", 9), padx=8, pady=6)
        label.pack()

    def hide_tooltip(self, event=None):
        if self.tooltip_window:
            self.tooltip_window.destroy()
            self.tooltip_window = None


class PageViewerDialog:
    """
    Shows pages of a PDF as thumbnails, five per row. In selection mode the
    pages can be toggled by clicking and the dialog is modal, so that
    show_for_result() can return the selected page numbers.

    Pages load on a background thread. Loading is not an operation: it does
    not block other operations or exiting, and stops when the dialog closes.
    """

    COLUMNS = 5
    SELECTED_BG = "#44555A"

    def __init__(self, root, path: str, page_numbers: Optional[List[int]] = None,
                 password: Optional[str] = None, select_allowed: bool = False):
        self.root = root
        self.path = path
        self.page_numbers = page_numbers
        self.password = password or None
        self.select_allowed = select_allowed
        self.selection = PageSelection()
        self.closed = False
        self.photos = []  # keep references so they aren't garbage-collected
        self.cells = {}

        self.window = tk.Toplevel(root)
        self.window.title("Select pages" if select_allowed else "Preview pages")
        self.window.transient(root)
        self.window.protocol("WM_DELETE_WINDOW", self.close)
        self.window.config(cursor="watch")

        self.loading_frame = tk.Frame(self.window, padx=30, pady=30)
        self.loading_frame.pack(fill=tk.X)
        tk.Label(self.loading_frame, text="Loading pages, please wait...", font=("Arial", 10)).pack()
        self.loading_bar = ttk.Progressbar(self.loading_frame, mode='determinate', length=300, maximum=100)
        self.loading_bar.pack(pady=10)

        # Scrollable grid of pages
        grid_container = tk.Frame(self.window)
        grid_container.pack(fill=tk.BOTH, expand=True, padx=10)
        self.canvas = tk.Canvas(grid_container, width=1000, height=520, highlightthickness=0)
        scrollbar = tk.Scrollbar(grid_container, command=self.canvas.yview)
        self.canvas.configure(yscrollcommand=scrollbar.set)
        scrollbar.pack(side=tk.RIGHT, fill=tk.Y)
        self.canvas.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        self.grid_frame = tk.Frame(self.canvas)
        self.canvas.create_window((0, 0), window=self.grid_frame, anchor="nw")
        self.grid_frame.bind(
            "<Configure>",
            lambda e: self.canvas.configure(scrollregion=self.canvas.bbox("all"))
        )

        button_frame = tk.Frame(self.window)
        button_frame.pack(pady=10)
        tk.Button(button_frame, text="OK", command=self.close, width=14,
                  bg="#E0E0E0", fg="black", font=("Arial", 10)).pack()

    # ----------------------------------------------------------------------
    # Background loading
    # ----------------------------------------------------------------------

    def start_filling(self):
        thread = threading.Thread(target=self._fill, daemon=True)
        thread.start()

    def _fill(self):
        def progress(done, total, message=""):
            self._schedule(self._set_progress, int(100 * done / max(total, 1)))

        try:
            for number, img in render_thumbnails(
                self.path, self.page_numbers, self.password,
                progress_callback=progress,
                cancel_callback=lambda: self.closed,
            ):
                self._schedule(self._add_page, number, img)
        except OperationCancelled:
            return
        except InvalidPasswordError:
            self._schedule(self._show_message, "Incorrect password for this PDF file!")
            return
        except InvalidInputError as e:
            self._schedule(self._show_message, str(e))
            return
        except (OSError, RuntimeError) as e:
            logger.warning("Could not load pages of %s: %s", self.path, e)
            self._schedule(self._show_message,
                           "Failed to open pages. Check if selected file exists and you have permissions to open it!")
            return
        self._schedule(self._finish_loading)

    def _schedule(self, func, *args):
        if not self.closed:
            try:
                self.root.after(0, func, *args)
            except (RuntimeError, tk.TclError):
                # main loop already gone
                pass

    # ----------------------------------------------------------------------
    # GUI thread
    # ----------------------------------------------------------------------

    def _set_progress(self, percent: int):
        if not self.closed:
            self.loading_bar.config(value=percent)

    def _add_page(self, number: int, img):
        if self.closed:
            return
        index = len(self.cells)
        row, col = divmod(index, self.COLUMNS)

        cell = tk.Frame(self.grid_frame, padx=5, pady=5, width=200, height=250)
        cell.grid(row=row, column=col, padx=5, pady=5)
        tk.Label(cell, text=f"Page {number}", font=("Arial", 9)).pack(anchor=tk.W)

        photo = ImageTk.PhotoImage(img)
        self.photos.append(photo)
        image_label = tk.Label(cell, image=photo)
        image_label.pack()

        if self.select_allowed:
            image_label.config(cursor="hand2")
            image_label.bind("<Button-1>", lambda e, n=number: self._toggle(n))

        self.cells[number] = cell

    def _toggle(self, number: int):
        self.selection.toggle(number)
        self._paint(number)

    def _paint(self, number: int):
        selected = self.selection.is_selected(number)
        self.cells[number].config(bg=self.SELECTED_BG if selected else self.window.cget("bg"))

    def _finish_loading(self):
        if self.closed:
            return
        self.loading_frame.pack_forget()
        self.window.config(cursor="")

    def _show_message(self, text: str):
        if self.closed:
            return
        self.loading_frame.pack_forget()
        self.canvas.master.pack_forget()
        self.window.config(cursor="")
        tk.Label(self.window, text=text, font=("Arial", 10), padx=20, pady=20).pack(before=self.window.winfo_children()[-1])

    def close(self):
        self.closed = True  # background thread checks this between pages
        self.window.destroy()

    # ----------------------------------------------------------------------
    # Showing
    # ----------------------------------------------------------------------

    def show_pages(self):
        self.start_filling()

    def show_for_result(self) -> List[int]:
        self.window.grab_set()
        self.start_filling()
        self.root.wait_window(self.window)
        return self.selection.result()


class PDFUtilsApp:
    def _get_dpi_scale(self) -> float:
        try:
            return self.root.winfo_fpixels("1i") / 96.0
        except tk.TclError:
            return 1.0

    def _scale_geometry(self, width: int, height: int) -> tuple:
        scale = self._get_dpi_scale()
        return max(1, int(width * scale)), max(1, int(height * scale))

    def __init__(self, root, config_file: Optional[Path] = None):
        self.root = root
        self.root.title("PDF Utilities")
        self.root.protocol("WM_DELETE_WINDOW", self.confirm_exit)

        self.config_file = config_file or default_config_path()
        self.settings = load_settings(self.config_file)

        # Prefer Documents when it exists; otherwise fall back to a known existing folder.
        home_dir = Path.home()
        candidates = [home_dir / "Documents", home_dir / "Desktop", home_dir]
        self.default_dir = str(next((p for p in candidates if p.exists()), home_dir))

        self.runner = OperationRunner(scheduler=lambda func, *args: self.root.after(0, func, *args),
                                      scheduler_errors=(RuntimeError, tk.TclError))

        # Extract to images
        self.img_source = tk.StringVar()
        self.img_password = tk.StringVar()
        self.img_dest = tk.StringVar(value=self.settings.get("destination_directory", ""))
        self.img_from = tk.StringVar()
        self.img_to = tk.StringVar()
        self.img_prefix = tk.StringVar(value=self.settings.get("image_prefix", "img_"))
        self.img_dpi = tk.StringVar(value=str(self.settings.get("render_dpi", 300)))

        # Extract to PDF
        self.pdf_source = tk.StringVar()
        self.pdf_password = tk.StringVar()
        self.pdf_dest = tk.StringVar(value=self.settings.get("destination_directory", ""))
        self.pdf_name = tk.StringVar()
        self.pdf_page_mode = tk.StringVar(value="range")
        self.pdf_from = tk.StringVar()
        self.pdf_to = tk.StringVar()
        self.pdf_pages = tk.StringVar()
        self.pdf_use_result_pw = tk.BooleanVar(value=False)
        self.pdf_result_pw = tk.StringVar()
        self.pdf_result_pw_confirm = tk.StringVar()

        # Images to PDF
        self.images: List[str] = []
        self.combine_dest = tk.StringVar(value=self.settings.get("destination_directory", ""))
        self.combine_name = tk.StringVar()
        self.combine_prefix = tk.StringVar()
        self.combine_use_result_pw = tk.BooleanVar(value=False)
        self.combine_result_pw = tk.StringVar()
        self.combine_result_pw_confirm = tk.StringVar()

        style = ttk.Style()
        style.theme_use('clam')
        style.configure('TNotebook.Tab', padding=[10, 4], font=('Arial', 10, 'bold'))
        style.map('TNotebook.Tab',
                  background=[('selected', '#4A90E2'), ('active', '#5B9FE8')],
                  foreground=[('selected', 'white'), ('active', 'white')])

        self.notebook = ttk.Notebook(root)
        self.notebook.pack(fill=tk.BOTH, expand=True, padx=5, pady=5)

        self._build_extract_images_tab()
        self._build_extract_pdf_tab()
        self._build_images_to_pdf_tab()
        self._build_status_bar()

    # ======================================================================
    # Layout helpers
    # ======================================================================

    def _tab(self, title: str, description_key: str) -> tk.Frame:
        frame = tk.Frame(self.notebook, padx=10, pady=10)
        self.notebook.add(frame, text=title)
        tk.Label(frame, text=MODE_DESCRIPTIONS[description_key], font=("Arial", 10),
                 wraplength=560, justify=tk.LEFT).pack(anchor=tk.W, pady=(0, 10))
        return frame

    def _section(self, parent, text: str) -> None:
        tk.Label(parent, text=text, font=("Arial", 10, "bold")).pack(anchor=tk.W, pady=(8, 2))

    def _path_row(self, parent, variable: tk.StringVar, command) -> None:
        row = tk.Frame(parent)
        row.pack(anchor=tk.W, fill=tk.X)
        tk.Label(row, text="Path:", font=("Arial", 10)).pack(side=tk.LEFT)
        tk.Entry(row, textvariable=variable, width=55).pack(side=tk.LEFT, padx=5)
        tk.Button(row, text="Browse", command=command, bg="#E0E0E0", font=("Arial", 9)).pack(side=tk.LEFT)

    def _labeled_entry(self, parent, text: str, variable, width: int = 6, show: Optional[str] = None,
                       tooltip: Optional[str] = None) -> tk.Entry:
        label = tk.Label(parent, text=text, font=("Arial", 10))
        label.pack(side=tk.LEFT)
        entry = tk.Entry(parent, textvariable=variable, width=width, show=show or "")
        entry.pack(side=tk.LEFT, padx=(5, 15))
        if tooltip:
            ToolTip(label, tooltip)
        return entry

    def _result_password_inputs(self, parent, use_var, pw_var, confirm_var) -> None:
        fields = tk.Frame(parent)

        def toggle():
            if use_var.get():
                fields.pack(anchor=tk.W, after=checkbox)
            else:
                fields.pack_forget()

        checkbox = tk.Checkbutton(parent, text="Encrypt generated PDF with a password",
                                  variable=use_var, command=toggle, font=("Arial", 10))
        checkbox.pack(anchor=tk.W, pady=(8, 0))
        self._labeled_entry(fields, "Enter password:", pw_var, width=20, show="*")
        self._labeled_entry(fields, "Confirm password:", confirm_var, width=20, show="*")

    def _button(self, parent, text: str, command) -> tk.Button:
        button = tk.Button(parent, text=text, command=command, width=16,
                           bg="#E0E0E0", fg="black", font=("Arial", 10))
        button.pack(side=tk.LEFT, padx=5)
        return button

    # ======================================================================
    # Tabs
    # ======================================================================

    def _build_extract_images_tab(self):
        tab = self._tab("Extract to images", "images")

        self._section(tab, "Select the source PDF file:")
        self._path_row(tab, self.img_source, lambda: self.browse_pdf(self.img_source))
        row = tk.Frame(tab)
        row.pack(anchor=tk.W, pady=2)
        self._labeled_entry(row, "Password for PDF:", self.img_password, width=20, show="*",
                            tooltip="Enter password here if the PDF is protected. Leave it empty if it has no password!")

        self._section(tab, "Select the destination folder for the images:")
        self._path_row(tab, self.img_dest, lambda: self.browse_folder(self.img_dest))

        self._section(tab, "Choose the pages to extract:")
        row = tk.Frame(tab)
        row.pack(anchor=tk.W, pady=2)
        self._labeled_entry(row, "From this page:", self.img_from,
                            tooltip="Extraction will start at this page. Must be a valid page number for the selected PDF.")
        self._labeled_entry(row, "To this page:", self.img_to,
                            tooltip="Pages will be extracted up to this page (inclusive).")
        row = tk.Frame(tab)
        row.pack(anchor=tk.W, pady=2)
        self._labeled_entry(row, "Image prefix:", self.img_prefix, width=10,
                            tooltip="Generated images will be prefixed with this. Must not be empty.")
        self._labeled_entry(row, "Resolution (DPI):", self.img_dpi, width=5)

        buttons = tk.Frame(tab)
        buttons.pack(pady=15)
        self._button(buttons, "Extract pages", self.extract_images)
        self._button(buttons, "Preview pages",
                     lambda: self.preview_range(self.img_source, self.img_password, self.img_from, self.img_to))

    def _build_extract_pdf_tab(self):
        tab = self._tab("Extract to PDF", "pdf")

        self._section(tab, "Select the source PDF file:")
        self._path_row(tab, self.pdf_source, lambda: self.browse_pdf(self.pdf_source))
        row = tk.Frame(tab)
        row.pack(anchor=tk.W, pady=2)
        self._labeled_entry(row, "Password for PDF:", self.pdf_password, width=20, show="*",
                            tooltip="Enter password here if the PDF is protected. Leave it empty if it has no password!")

        self._section(tab, "Select the destination folder for the new PDF:")
        self._path_row(tab, self.pdf_dest, lambda: self.browse_folder(self.pdf_dest))
        row = tk.Frame(tab)
        row.pack(anchor=tk.W, pady=2)
        self._labeled_entry(row, "Name of the result:", self.pdf_name, width=25,
                            tooltip="You don't have to write '.pdf' to the end of the name, but you can.")

        self._result_password_inputs(tab, self.pdf_use_result_pw, self.pdf_result_pw, self.pdf_result_pw_confirm)

        self._section(tab, "Choose the pages to extract:")
        radios = tk.Frame(tab)
        radios.pack(anchor=tk.W)
        cards = tk.Frame(tab)
        cards.pack(anchor=tk.W, fill=tk.X)

        range_card = tk.Frame(cards)
        row = tk.Frame(range_card)
        row.pack(anchor=tk.W, pady=2)
        self._labeled_entry(row, "From this page:", self.pdf_from)
        self._labeled_entry(row, "To this page:", self.pdf_to)
        buttons = tk.Frame(range_card)
        buttons.pack(pady=10)
        self._button(buttons, "Extract pages", self.extract_pdf)
        self._button(buttons, "Preview pages",
                     lambda: self.preview_range(self.pdf_source, self.pdf_password, self.pdf_from, self.pdf_to))

        individual_card = tk.Frame(cards)
        row = tk.Frame(individual_card)
        row.pack(anchor=tk.W, pady=2)
        self._labeled_entry(row, "Pages to be extracted:", self.pdf_pages, width=30,
                            tooltip="Separate page numbers with a comma, or use the selector tool!")
        buttons = tk.Frame(individual_card)
        buttons.pack(pady=10)
        self._button(buttons, "Extract", self.extract_pdf)
        self._button(buttons, "Select pages", self.select_pages)

        def show_card():
            range_card.pack_forget()
            individual_card.pack_forget()
            (range_card if self.pdf_page_mode.get() == "range" else individual_card).pack(anchor=tk.W, fill=tk.X)

        for text, value in (("Range of pages", "range"), ("Individual pages", "individual")):
            tk.Radiobutton(radios, text=text, value=value, variable=self.pdf_page_mode,
                           command=show_card, font=("Arial", 10)).pack(side=tk.LEFT, padx=(0, 15))
        show_card()

    def _build_images_to_pdf_tab(self):
        tab = self._tab("Images to PDF", "combine")

        self._section(tab, "Select the destination folder for the combined PDF:")
        self._path_row(tab, self.combine_dest, lambda: self.browse_folder(self.combine_dest))
        row = tk.Frame(tab)
        row.pack(anchor=tk.W, pady=2)
        self._labeled_entry(row, "Name of the result:", self.combine_name, width=25,
                            tooltip="You don't have to write '.pdf' to the end of the name, but you can.")

        self._result_password_inputs(tab, self.combine_use_result_pw,
                                     self.combine_result_pw, self.combine_result_pw_confirm)

        self._section(tab, "Select the images to be combined:")
        self.selection_label = tk.Label(tab, text=describe_selection(self.images), font=("Arial", 10),
                                        relief=tk.SUNKEN, anchor=tk.W, justify=tk.LEFT,
                                        width=70, height=2, bg="white", wraplength=520)
        self.selection_label.pack(anchor=tk.W, pady=2)
        ToolTip(self.selection_label, "Use the image selector tool to specify images!\n"
                                      "Images are combined in the order they were added.")
        row = tk.Frame(tab)
        row.pack(anchor=tk.W, pady=2)
        self._labeled_entry(row, "Folder image prefix:", self.combine_prefix, width=10,
                            tooltip="When adding a folder, only images whose name starts with this are added.\n"
                                    "Leave it empty to add every image of the folder.")

        buttons = tk.Frame(tab)
        buttons.pack(pady=15)
        self._button(buttons, "Combine", self.combine_images)
        self._button(buttons, "Select images", self.select_images)
        self._button(buttons, "Add folder", self.add_image_folder)
        self._button(buttons, "Clear", self.clear_images)

    def _build_status_bar(self):
        bar = tk.Frame(self.root, bd=1, relief=tk.SUNKEN)
        bar.pack(side=tk.BOTTOM, fill=tk.X)

        tk.Button(bar, text="Exit", command=self.confirm_exit, width=8,
                  bg="#E0E0E0", font=("Arial", 9)).pack(side=tk.LEFT, padx=5, pady=3)
        link = tk.Label(bar, text="Project page", fg="#1A5FB4", cursor="hand2", font=("Arial", 9, "underline"))
        link.pack(side=tk.LEFT, padx=10)
        link.bind("<Button-1>", lambda e: self.open_project_page())

        self.cancel_button = tk.Button(bar, text="Cancel", command=self.cancel_operation, width=8,
                                       bg="#E0E0E0", font=("Arial", 9), state=tk.DISABLED)
        self.cancel_button.pack(side=tk.RIGHT, padx=5, pady=3)
        self.progress_bar = ttk.Progressbar(bar, mode='determinate', length=180, maximum=100)
        self.progress_bar.pack(side=tk.RIGHT, padx=5)
        self.status_label = tk.Label(bar, text="No ongoing operation.", font=("Arial", 9))
        self.status_label.pack(side=tk.RIGHT, padx=5)

    # ======================================================================
    # Browsing
    # ======================================================================

    def browse_pdf(self, variable: tk.StringVar):
        path = filedialog.askopenfilename(
            title="Select a PDF file!",
            initialdir=self.settings.get("source_directory") or self.default_dir,
            filetypes=[("PDF files", "*.pdf")]
        )
        if not path:
            return
        readable, problem = is_pdf_readable(path)
        if not readable and problem != "Encrypted PDF":
            self.show_error_dialog("Failed to open",
                                   f"Check if selected file exists and you have permissions to open it!\n{problem}")
            return
        variable.set(path)
        self._remember("source_directory", os.path.dirname(path))
        if problem == "Encrypted PDF":
            self.show_info_dialog("Protected PDF", "This PDF is password protected, enter its password before continuing.")

    def browse_folder(self, variable: tk.StringVar):
        directory = filedialog.askdirectory(
            title="Select a folder!",
            initialdir=variable.get() or self.settings.get("destination_directory") or self.default_dir
        )
        if directory:
            variable.set(directory)
            self._remember("destination_directory", directory)

    def _remember(self, key: str, value):
        self.settings[key] = value
        save_settings(self.config_file, self.settings)

    def open_project_page(self):
        try:
            webbrowser.open(PROJECT_URL)
        except webbrowser.Error:
            self.show_info_dialog("Failed to open", f"Link: {PROJECT_URL}")

    # ======================================================================
    # Input checks
    # ======================================================================

    def _read_result_password(self, use_var, pw_var, confirm_var) -> Optional[str]:
        """Return the result password, "" for none, or None when the inputs are wrong."""
        if not use_var.get():
            return ""
        try:
            return check_result_password(pw_var.get(), confirm_var.get())
        except InvalidInputError as e:
            self.show_error_dialog("Password error!", str(e))
            return None

    def _page_count(self, source: str, password: str) -> Optional[int]:
        """Number of pages of the source PDF, or None after reporting why it cannot be read."""
        try:
            return pdf_page_count(source, password)
        except InvalidPasswordError as e:
            self.show_error_dialog("Incorrect password", str(e))
        except OSError:
            self.show_error_dialog("Failed to open", f"File not found or not readable: {source or '[EMPTY]'}")
        except PyPdfError as e:
            self.show_error_dialog("Failed to open", f"Not a valid PDF file: {e}")
        return None

    def _read_name(self, variable: tk.StringVar) -> Optional[str]:
        name = variable.get().strip()
        is_valid, error_message, corrected = validate_output_name(name)
        if is_valid:
            return name
        if "invalid characters" in error_message.lower():
            messagebox.showwarning("Name Correction", error_message)
            variable.set(corrected)
            return corrected
        self.show_error_dialog("Invalid name", error_message)
        return None

    # ======================================================================
    # Operations
    # ======================================================================

    def extract_images(self):
        total_pages = self._page_count(self.img_source.get(), self.img_password.get())
        if total_pages is None:
            return
        try:
            from_page, to_page = parse_page_bounds(self.img_from.get(), self.img_to.get(), total_pages)
            try:
                dpi = int(self.img_dpi.get())
            except ValueError:
                raise InvalidInputError(f"{self.img_dpi.get() or '[EMPTY]'} is not a valid resolution!")
            prefix = self.img_prefix.get()
            if not prefix.strip():
                raise InvalidInputError("Image prefix must not be empty.")
        except InvalidInputError as e:
            self.show_error_dialog("Invalid input", str(e))
            return

        source, dest = self.img_source.get(), self.img_dest.get()
        options = ExtractImagesOptions(image_prefix=prefix, dpi=dpi, password=self.img_password.get())
        self.settings.update(image_prefix=prefix, render_dpi=dpi)
        save_settings(self.config_file, self.settings)

        def target(progress, cancelled):
            return extract_to_images(source, dest, from_page, to_page, options, progress, cancelled)

        self._start_operation("extract to images", target,
                              lambda written: f"{len(written)} image(s) saved to {dest}")

    def extract_pdf(self):
        total_pages = self._page_count(self.pdf_source.get(), self.pdf_password.get())
        if total_pages is None:
            return
        try:
            if self.pdf_page_mode.get() == "range":
                indices = page_range_to_indices(
                    *parse_page_bounds(self.pdf_from.get(), self.pdf_to.get(), total_pages))
            else:
                indices = parse_page_list(self.pdf_pages.get(), total_pages)
        except InvalidInputError as e:
            self.show_error_dialog("Invalid pages", str(e))
            return

        name = self._read_name(self.pdf_name)
        if name is None:
            return
        result_password = self._read_result_password(self.pdf_use_result_pw, self.pdf_result_pw,
                                                     self.pdf_result_pw_confirm)
        if result_password is None:
            return

        source, dest = self.pdf_source.get(), self.pdf_dest.get()
        options = ExtractPdfOptions(name=name, password=self.pdf_password.get(),
                                    result_password=result_password)

        def target(progress, cancelled):
            return extract_to_pdf(source, dest, indices, options, progress, cancelled)

        self._start_operation("extract to pdf", target, lambda output: f"Pages extracted to {output}")

    def combine_images(self):
        if not self.images:
            self.show_error_dialog("No images", "Select the images to be combined first!")
            return
        name = self._read_name(self.combine_name)
        if name is None:
            return
        result_password = self._read_result_password(self.combine_use_result_pw, self.combine_result_pw,
                                                     self.combine_result_pw_confirm)
        if result_password is None:
            return

        images, dest = list(self.images), self.combine_dest.get()
        options = ImagesToPdfOptions(name=name, result_password=result_password)

        def target(progress, cancelled):
            return images_to_pdf(images, dest, options, progress, cancelled)

        self._start_operation("images to pdf", target,
                              lambda output: f"{len(images)} image(s) combined into {output}")

    def _start_operation(self, name: str, target, success_message):
        started = self.runner.start(
            name, target,
            on_progress=self._on_progress,
            on_done=lambda result: self._on_done(success_message(result)),
            on_error=self._on_error,
            on_cancelled=self._on_cancelled,
        )
        if not started:
            self.show_info_dialog("Please wait",
                                  "An operation is already in progress. Wait for it to finish before starting another one.")
            return
        self.status_label.config(text="Operation in progress")
        self.progress_bar.config(value=0)
        self.cancel_button.config(state=tk.NORMAL, text="Cancel")

    def _on_progress(self, done: int, total: int, message: str):
        self.progress_bar.config(value=int(100 * done / max(total, 1)))

    def _operation_finished(self, status: str):
        self.status_label.config(text=status)
        self.progress_bar.config(value=0)
        self.cancel_button.config(state=tk.DISABLED, text="Cancel")

    def _on_done(self, message: str):
        self._operation_finished("Operation complete.")
        self.show_info_dialog("Success", message)

    def _on_cancelled(self):
        self._operation_finished("Operation cancelled.")

    def _on_error(self, error: BaseException):
        self._operation_finished("No ongoing operation.")
        if isinstance(error, InvalidPasswordError):
            self.show_error_dialog("Incorrect password", str(error))
        elif isinstance(error, InvalidInputError):
            self.show_error_dialog("Invalid input", str(error))
        elif isinstance(error, FileNotFoundError):
            self.show_error_dialog("Error", f"File not found: {error.filename or error}")
        else:
            self.show_error_dialog("Error", f"An error occurred: {error}")

    def cancel_operation(self):
        self.runner.cancel()
        self.cancel_button.config(state=tk.DISABLED, text="Cancelling...")

    # ======================================================================
    # Page viewer
    # ======================================================================

    def preview_range(self, source_var, password_var, from_var, to_var):
        total_pages = self._page_count(source_var.get(), password_var.get())
        if total_pages is None:
            return
        try:
            from_page, to_page = parse_page_bounds(from_var.get(), to_var.get(), total_pages)
        except InvalidInputError as e:
            self.show_error_dialog("Invalid pages", str(e))
            return
        dialog = PageViewerDialog(self.root, source_var.get(), list(range(from_page, to_page + 1)),
                                  password_var.get(), select_allowed=False)
        dialog.show_pages()

    def select_pages(self):
        dialog = PageViewerDialog(self.root, self.pdf_source.get(), None,
                                  self.pdf_password.get(), select_allowed=True)
        selected = dialog.show_for_result()
        if selected:
            self.pdf_pages.set(format_page_list(selected))

    # ======================================================================
    # Image list
    # ======================================================================

    def select_images(self):
        patterns = " ".join(f"*{ext}" for ext in IMAGE_EXTS)
        paths = filedialog.askopenfilenames(
            title="Select images",
            initialdir=self.settings.get("images_directory") or self.default_dir,
            filetypes=[("Images", patterns)]
        )
        if not paths:
            return
        self._remember("images_directory", os.path.dirname(paths[0]))
        self._add_images(list(paths))

    def add_image_folder(self):
        folder = filedialog.askdirectory(
            title="Select a folder with images",
            initialdir=self.settings.get("images_directory") or self.default_dir
        )
        if not folder:
            return
        self._remember("images_directory", folder)
        try:
            found = collect_folder_images(folder, self.combine_prefix.get() or None)
        except InvalidInputError as e:
            self.show_error_dialog("Invalid folder", str(e))
            return
        if not found:
            self.show_info_dialog("No images", "The selected folder has no matching images.")
            return
        self._add_images(found)

    def _add_images(self, paths: List[str]):
        added, dup_count, duplicates, unsupported_count, unsupported = add_images_to_list(self.images, paths)
        self.selection_label.config(text=describe_selection(self.images))
        if dup_count:
            messagebox.showwarning(
                "Duplicates skipped",
                f"{dup_count} image(s) already selected:\n" + "\n".join(duplicates[:10])
            )
        if unsupported_count:
            messagebox.showwarning(
                "Unsupported files",
                f"{unsupported_count} file(s) are not supported images:\n" + "\n".join(unsupported[:10])
            )

    def clear_images(self):
        self.images.clear()
        self.selection_label.config(text=describe_selection(self.images))

    # ======================================================================
    # Dialogs
    # ======================================================================

    def _centered_dialog(self, title: str, width: int, height: int) -> tk.Toplevel:
        window = tk.Toplevel(self.root)
        window.title(title)
        dialog_width, dialog_height = self._scale_geometry(width, height)
        window.resizable(False, False)
        window.transient(self.root)

        # Center on parent window
        self.root.update_idletasks()
        center_x = self.root.winfo_x() + (self.root.winfo_width() - dialog_width) // 2
        center_y = self.root.winfo_y() + (self.root.winfo_height() - dialog_height) // 2
        window.geometry(f"{dialog_width}x{dialog_height}+{center_x}+{center_y}")
        return window

    def _message_dialog(self, title: str, message: str, color: str):
        window = self._centered_dialog(title, 450, 180)
        window.grab_set()
        tk.Label(window, text=title, font=("Arial", 12, "bold"), fg=color, pady=10).pack()
        tk.Label(window, text=message, font=("Arial", 10), fg="black", anchor="w",
                 justify=tk.LEFT, wraplength=400).pack(pady=10, padx=20, fill=tk.BOTH, expand=True)
        button_frame = tk.Frame(window)
        button_frame.pack(pady=10)
        tk.Button(button_frame, text="OK", command=window.destroy, width=14,
                  bg="#E0E0E0", fg="black", font=("Arial", 10)).pack()
        self.root.wait_window(window)

    def show_info_dialog(self, title, message):
        self._message_dialog(title, message, "#1A5FB4")

    def show_error_dialog(self, title, message):
        """Show an error dialog centered on parent window"""
        self._message_dialog(title, message, "#CC0000")

    def confirm_exit(self):
        if is_operation_ongoing():
            if not messagebox.askokcancel(
                "Operation ongoing",
                "Exiting now will cancel the ongoing operation. Are you sure?",
                icon=messagebox.WARNING
            ):
                return
            self.runner.cancel()
        save_settings(self.config_file, self.settings)
        self.root.destroy()


def run_gui() -> None:
    _enable_dpi_awareness()
    root = tk.Tk()
    PDFUtilsApp(root)
    root.mainloop()


def main() -> int:
    settings = load_settings(default_config_path())
    setup_logging(settings.get("log_level", "INFO"))
    if len(sys.argv) > 1:
        return cli.run(sys.argv[1:])
    run_gui()
    return 0


if __name__ == "__main__":
    sys.exit(main())
