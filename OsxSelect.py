# OsxSelect.py
import customtkinter as ctk

from app import OsxSelectApp
from utils import setup_logging

if __name__ == "__main__":
    setup_logging()

    root = ctk.CTk()

    app = OsxSelectApp(root)
    root.mainloop()
