"""Transform session parameters."""

from dataclasses import dataclass


SUPPORTED_EXTENSIONS = ('png', 'bmp', 'jpg', 'jpeg', 'tif', 'tiff')


@dataclass
class TransformParams:
    """Options for a transform/recover run."""

    write_files: bool = False
    output_dir: str = "."
    file_ext: str = "png"
    data_range: float = 255.0

    def __post_init__(self):
        self.file_ext = self.file_ext.lower().lstrip('.')
        if self.file_ext not in SUPPORTED_EXTENSIONS:
            raise ValueError(f"file_ext must be one of {SUPPORTED_EXTENSIONS}, got {self.file_ext!r}")
        if self.data_range <= 0:
            raise ValueError(f"data_range must be positive, got {self.data_range}")
