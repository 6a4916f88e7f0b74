"""
Shared configuration and constants.
"""

# Standard Library
import dataclasses
import enum
import pathlib

# PIP3 modules
import reportlab.lib.pagesizes


POINTS_PER_INCH = 72.0

DEFAULT_CODE = "HP"
DEFAULT_START = 1
DEFAULT_END = 20

DEFAULT_OUTPUT_DIR = "qr-codes"
DEFAULT_LOGO_PATH = "logo.png"
DOCUMENT_NAME = "QR_Codes.pdf"

DEFAULT_PRESET = "grid16"
GEOMETRY_TOLERANCE = 1.0

PROGRESS_BAR_WIDTH = 20
PROGRESS_UPDATE_EVERY = 10

FONT_CANDIDATES = (
	"DejaVuSans-Bold.ttf",
	"/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
	"/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
	"Arial Bold.ttf",
	"arialbd.ttf",
)

OUTLINE_GRAY = 0.7
OUTLINE_WIDTH = 0.3


#============================================
class LayoutMode(enum.Enum):
	"""
	Grid packing policy.

	EVEN puts gaps before the first tile, between tiles and after the last
	tile. BETWEEN puts gaps only between tiles.
	"""
	EVEN = "even"
	BETWEEN = "between"


@dataclasses.dataclass
class Margins:
	top: float
	right: float
	bottom: float
	left: float


@dataclasses.dataclass
class ComposerConfig:
	canvas_width: int
	canvas_height: int
	qr_size: int
	qr_top: int
	qr_inset: int
	qr_border_radius: int
	qr_border_width: int
	band_gap: int
	label_height: int
	label_margin: int
	label_side_inset: int
	label_radius: int
	label_border_width: int
	text_size_with_logo: int
	text_size_centered: int
	logo_text_gap: int
	background_color: str = "#FFFFFF"
	qr_border_color: str = "#333333"
	qr_dark_color: str = "#000000"
	qr_light_color: str = "#FFFFFF"
	label_fill_color: str = "#F8F9FA"
	label_stroke_color: str = "#2C3E50"
	text_color: str = "#2C3E50"


@dataclasses.dataclass
class SheetConfig:
	page_width: float
	page_height: float
	margins: Margins
	columns: int
	rows: int
	mode: LayoutMode
	pixels_per_inch: float
	min_gap: float = 0.0
	draw_outlines: bool = False


@dataclasses.dataclass
class PageGeometry:
	page_width: float
	page_height: float
	margins: Margins
	columns: int
	rows: int
	tile_width: float
	tile_height: float
	horizontal_spacing: float
	vertical_spacing: float
	horizontal_edge: float
	vertical_edge: float
	mode: LayoutMode
	scale: float = 1.0

	@property
	def usable_width(self) -> float:
		return self.page_width - self.margins.left - self.margins.right

	@property
	def usable_height(self) -> float:
		return self.page_height - self.margins.top - self.margins.bottom

	@property
	def tiles_per_page(self) -> int:
		return self.columns * self.rows

	@property
	def total_horizontal_spacing(self) -> float:
		return (self.columns - 1) * self.horizontal_spacing + 2.0 * self.horizontal_edge

	@property
	def total_vertical_spacing(self) -> float:
		return (self.rows - 1) * self.vertical_spacing + 2.0 * self.vertical_edge


@dataclasses.dataclass(frozen=True)
class LabelImage:
	text: str
	pixel_width: int
	pixel_height: int
	data: bytes = dataclasses.field(repr=False)
	path: pathlib.Path | None = None


@dataclasses.dataclass
class AssemblyResult:
	total_labels: int
	pages: int
	labels_per_page: int
	placeholders: int
	output_path: pathlib.Path


#============================================
def inches_to_points(value: float) -> float:
	"""
	Convert inches to points.

	Args:
		value: Inches value.

	Returns:
		Points value.
	"""
	return value * POINTS_PER_INCH


#============================================
def pixels_to_points(pixels: float, pixels_per_inch: float) -> float:
	"""
	Convert a raster length to points at a given placement resolution.

	Args:
		pixels: Length in pixels.
		pixels_per_inch: Placement resolution.

	Returns:
		Length in points.
	"""
	return pixels * POINTS_PER_INCH / pixels_per_inch


#============================================
def uniform_margins(inches: float) -> Margins:
	"""
	Build equal margins on all four sides.

	Args:
		inches: Margin in inches.

	Returns:
		Margins in points.
	"""
	value = inches_to_points(inches)
	return Margins(top=value, right=value, bottom=value, left=value)


LETTER_WIDTH, LETTER_HEIGHT = reportlab.lib.pagesizes.letter

COMPOSER_PRESETS = {
	"grid16": ComposerConfig(
		canvas_width=200,
		canvas_height=250,
		qr_size=160,
		qr_top=8,
		qr_inset=3,
		qr_border_radius=8,
		qr_border_width=2,
		band_gap=15,
		label_height=60,
		label_margin=8,
		label_side_inset=15,
		label_radius=6,
		label_border_width=2,
		text_size_with_logo=20,
		text_size_centered=24,
		logo_text_gap=10,
	),
	"grid8": ComposerConfig(
		canvas_width=256,
		canvas_height=316,
		qr_size=220,
		qr_top=8,
		qr_inset=4,
		qr_border_radius=18,
		qr_border_width=4,
		band_gap=14,
		label_height=64,
		label_margin=8,
		label_side_inset=18,
		label_radius=8,
		label_border_width=2,
		text_size_with_logo=24,
		text_size_centered=28,
		logo_text_gap=10,
	),
}

SHEET_PRESETS = {
	"grid16": SheetConfig(
		page_width=LETTER_WIDTH,
		page_height=LETTER_HEIGHT,
		margins=uniform_margins(0.3),
		columns=4,
		rows=4,
		mode=LayoutMode.EVEN,
		pixels_per_inch=120.0,
	),
	"grid8": SheetConfig(
		page_width=LETTER_WIDTH,
		page_height=LETTER_HEIGHT,
		margins=uniform_margins(0.7),
		columns=4,
		rows=2,
		mode=LayoutMode.BETWEEN,
		pixels_per_inch=96.0,
		min_gap=pixels_to_points(12, 96.0),
	),
}
