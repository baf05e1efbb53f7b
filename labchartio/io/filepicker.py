"""
Interactive selection of the file to load, used by
:func:`labchartio.io.load_labchart` when no path is given.

Requires PySide6 (``pip install labchartio[gui]``).
"""


def ask_mat_filename(title="Select a MAT-file"):
    """
    Open a file dialog restricted to MAT-files and return the chosen path,
    or an empty string if the dialog was cancelled.
    """
    from PySide6 import QtWidgets

    # a dialog needs a running QApplication, reuse the caller's one if any
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    path, _ = QtWidgets.QFileDialog.getOpenFileName(
        None,
        caption=title,
        filter="MAT-files (*.mat)",
    )
    return path
