from pathlib import Path


def add_extension(path: Path, extension: str) -> Path:
    """
    Append `extension` to the file name unless it already ends with it.

    Example:
        out       + '.pgm' -> out.pgm
        out.PGM   + '.pgm' -> out.PGM
        out.v1    + '.pgm' -> out.v1.pgm
    """
    if path.name.lower().endswith(extension.lower()):
        return path
    return path.with_name(path.name + extension)
