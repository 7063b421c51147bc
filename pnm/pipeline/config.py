from dataclasses import dataclass


@dataclass
class PnmConfig:
    """
    Configuration for reading and writing PNM images.
    """
    # "binary" or "ascii"; used when no encoding is passed explicitly
    encoding: str = "binary"
    # append .pbm/.pgm/.ppm to file names on write
    add_extension: bool = False
    # text encoding for header comments
    text_encoding: str = "utf-8"
