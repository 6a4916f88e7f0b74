"""
Label image composition: QR symbol, rounded border, label band, logo.
"""

# Standard Library
import dataclasses
import io
import pathlib

# PIP3 modules
import PIL.Image
import PIL.ImageDraw
import PIL.ImageFont
import qrcode
import qrcode.constants

# local repo modules
import qr_label_sheets as qls
import qr_label_sheets.config


ComposerConfig = qls.config.ComposerConfig
LabelImage = qls.config.LabelImage

FONT_CANDIDATES = qls.config.FONT_CANDIDATES
PROGRESS_BAR_WIDTH = qls.config.PROGRESS_BAR_WIDTH
PROGRESS_UPDATE_EVERY = qls.config.PROGRESS_UPDATE_EVERY


@dataclasses.dataclass
class LogoResult:
	path: pathlib.Path
	image: PIL.Image.Image | None = None
	reason: str = ""

	@property
	def loaded(self) -> bool:
		return self.image is not None


@dataclasses.dataclass
class BandPlan:
	band_box: tuple[int, int, int, int]
	logo_box: tuple[float, float, int, int] | None
	text_box: tuple[float, float, float, float]

	@property
	def text_center(self) -> tuple[float, float]:
		left, top, width, height = self.text_box
		return (left + width / 2.0, top + height / 2.0)


#============================================
def print_progress(prefix: str, current: int, total: int) -> None:
	"""
	Print a simple progress bar.

	Args:
		prefix: Label text.
		current: Current count.
		total: Total count.
	"""
	if total <= 0:
		return
	percent = int(round((current / total) * 100.0))
	filled = int(round(PROGRESS_BAR_WIDTH * percent / 100.0))
	bar = "#" * filled + "-" * (PROGRESS_BAR_WIDTH - filled)
	print(f"{prefix} [{bar}] {current}/{total} ({percent}%)", end="\r")


#============================================
def sanitize_token(value: str) -> str:
	"""
	Sanitize a label for use as a file name stem.

	Args:
		value: Input string.

	Returns:
		String with characters other than letters, digits, "-" and "_"
		replaced by "_".
	"""
	result: list[str] = []
	for char in value:
		if char.isalnum() or char in "-_":
			result.append(char)
		else:
			result.append("_")
	sanitized = "".join(result).strip("_")
	if not sanitized:
		return "label"
	return sanitized


#============================================
def clamp_corner_radius(width: float, height: float, radius: float) -> float:
	"""
	Clamp a corner radius so opposite arcs never overlap.

	Args:
		width: Box width.
		height: Box height.
		radius: Requested radius.

	Returns:
		Radius no larger than half the smaller box dimension.
	"""
	return max(0.0, min(radius, width / 2.0, height / 2.0))


#============================================
def draw_rounded_rect(
	draw: PIL.ImageDraw.ImageDraw,
	box: tuple[int, int, int, int],
	radius: float,
	fill: str | None = None,
	outline: str | None = None,
	width: int = 1,
) -> None:
	"""
	Draw a rounded rectangle with a clamped corner radius.

	Args:
		draw: Drawing surface.
		box: Tuple of (x0, y0, x1, y1).
		radius: Requested corner radius.
		fill: Fill color or None.
		outline: Stroke color or None.
		width: Stroke width in pixels.
	"""
	x0, y0, x1, y1 = box
	clamped = clamp_corner_radius(x1 - x0, y1 - y0, radius)
	draw.rounded_rectangle(box, radius=int(clamped), fill=fill, outline=outline, width=width)


#============================================
def make_qr_image(text: str, size: int, config: ComposerConfig) -> PIL.Image.Image:
	"""
	Encode text as a square QR bitmap.

	Args:
		text: Payload.
		size: Output edge length in pixels.
		config: Composer configuration.

	Returns:
		RGB image of size x size.
	"""
	qr = qrcode.QRCode(
		version=None,
		error_correction=qrcode.constants.ERROR_CORRECT_M,
		box_size=10,
		border=1,
	)
	qr.add_data(text)
	qr.make(fit=True)
	symbol = qr.make_image(fill_color=config.qr_dark_color, back_color=config.qr_light_color).convert("RGB")
	return symbol.resize((size, size), PIL.Image.Resampling.NEAREST)


#============================================
def load_logo(path: pathlib.Path) -> LogoResult:
	"""
	Try to load the logo asset.

	Args:
		path: Logo file path.

	Returns:
		LogoResult with the image, or with the failure reason.
	"""
	path = pathlib.Path(path)
	if not path.is_file():
		reason = "file not found"
	else:
		try:
			with PIL.Image.open(path) as handle:
				image = handle.convert("RGBA")
			return LogoResult(path=path, image=image)
		except OSError as error:
			reason = str(error) or error.__class__.__name__
	print(f"Warning: logo not loaded from {path} ({reason}). Drawing text only.")
	return LogoResult(path=path, reason=reason)


#============================================
def fit_logo_size(width: int, height: int, max_size: int) -> tuple[int, int]:
	"""
	Scale a logo into a square box along its dominant axis.

	Args:
		width: Logo width.
		height: Logo height.
		max_size: Box edge length.

	Returns:
		Tuple of (width, height), each at least 1 pixel.
	"""
	aspect = width / height
	if aspect > 1.0:
		logo_width = float(max_size)
		logo_height = logo_width / aspect
	else:
		logo_height = float(max_size)
		logo_width = logo_height * aspect
	return (max(1, int(round(logo_width))), max(1, int(round(logo_height))))


#============================================
def load_font(size: int) -> PIL.ImageFont.ImageFont | PIL.ImageFont.FreeTypeFont:
	"""
	Load a bold font, falling back to the bundled default.

	Args:
		size: Font size in pixels.

	Returns:
		Font object.
	"""
	for candidate in FONT_CANDIDATES:
		try:
			return PIL.ImageFont.truetype(candidate, size)
		except OSError:
			continue
	return PIL.ImageFont.load_default(size=size)


#============================================
def compute_band_box(config: ComposerConfig) -> tuple[int, int, int, int]:
	"""
	Compute the label band rectangle below the QR area.

	Args:
		config: Composer configuration.

	Returns:
		Tuple of (x0, y0, x1, y1).
	"""
	band_x = config.label_side_inset
	band_y = config.qr_top + config.qr_size + config.band_gap
	band_width = config.canvas_width - 2 * config.label_side_inset
	return (band_x, band_y, band_x + band_width, band_y + config.label_height)


#============================================
def plan_label_band(
	config: ComposerConfig,
	text_size: tuple[float, float],
	logo_size: tuple[int, int] | None,
) -> BandPlan:
	"""
	Place the logo and label text inside the band.

	With a logo the logo sits at the left inner margin and the text follows
	it. Without one the text is centered on the canvas.

	Args:
		config: Composer configuration.
		text_size: Tuple of (width, height) of the rendered text.
		logo_size: Tuple of (width, height) of the scaled logo, or None.

	Returns:
		BandPlan.
	"""
	band_box = compute_band_box(config)
	band_x, band_y, _band_x1, _band_y1 = band_box
	text_width, text_height = text_size
	center_y = band_y + config.label_height / 2.0
	text_top = center_y - text_height / 2.0

	if logo_size is None:
		text_left = config.canvas_width / 2.0 - text_width / 2.0
		return BandPlan(band_box=band_box, logo_box=None, text_box=(text_left, text_top, text_width, text_height))

	logo_width, logo_height = logo_size
	logo_x = band_x + config.label_margin
	logo_y = band_y + (config.label_height - logo_height) / 2.0
	text_left = logo_x + logo_width + config.logo_text_gap
	return BandPlan(
		band_box=band_box,
		logo_box=(logo_x, logo_y, logo_width, logo_height),
		text_box=(text_left, text_top, text_width, text_height),
	)


#============================================
def compose_label_image(text: str, config: ComposerConfig, logo: LogoResult) -> LabelImage:
	"""
	Compose one labeled QR image.

	Args:
		text: Label text, also the QR payload.
		config: Composer configuration.
		logo: Result of the logo load attempt.

	Returns:
		LabelImage holding PNG bytes.
	"""
	image = PIL.Image.new("RGB", (config.canvas_width, config.canvas_height), config.background_color)
	draw = PIL.ImageDraw.Draw(image)

	qr_x = (config.canvas_width - config.qr_size) // 2
	qr_box = (qr_x, config.qr_top, qr_x + config.qr_size, config.qr_top + config.qr_size)
	symbol_size = config.qr_size - 2 * config.qr_inset
	symbol = make_qr_image(text, symbol_size, config)
	image.paste(symbol, (qr_x + config.qr_inset, config.qr_top + config.qr_inset))
	draw_rounded_rect(
		draw,
		qr_box,
		config.qr_border_radius,
		outline=config.qr_border_color,
		width=config.qr_border_width,
	)

	band_box = compute_band_box(config)
	draw_rounded_rect(
		draw,
		band_box,
		config.label_radius,
		fill=config.label_fill_color,
		outline=config.label_stroke_color,
		width=config.label_border_width,
	)

	logo_size = None
	if logo.loaded:
		max_size = config.label_height - 2 * config.label_margin
		logo_size = fit_logo_size(logo.image.width, logo.image.height, max_size)
		font = load_font(config.text_size_with_logo)
	else:
		font = load_font(config.text_size_centered)

	bbox = draw.textbbox((0, 0), text, font=font)
	text_size = (bbox[2] - bbox[0], bbox[3] - bbox[1])
	plan = plan_label_band(config, text_size, logo_size)

	if plan.logo_box is not None:
		logo_x, logo_y, logo_width, logo_height = plan.logo_box
		scaled = logo.image.resize((logo_width, logo_height), PIL.Image.Resampling.LANCZOS)
		image.paste(scaled, (int(round(logo_x)), int(round(logo_y))), scaled)

	text_left, text_top, _text_width, _text_height = plan.text_box
	draw.text((text_left - bbox[0], text_top - bbox[1]), text, font=font, fill=config.text_color)

	buffer = io.BytesIO()
	image.save(buffer, format="PNG")
	return LabelImage(
		text=text,
		pixel_width=config.canvas_width,
		pixel_height=config.canvas_height,
		data=buffer.getvalue(),
	)


#============================================
def label_file_name(text: str) -> str:
	return f"{sanitize_token(text)}.png"


#============================================
def write_label_image(label: LabelImage, output_dir: pathlib.Path) -> LabelImage:
	"""
	Write a label image to disk.

	Args:
		label: Composed label image.
		output_dir: Output directory.

	Returns:
		Copy of the label carrying the written path.
	"""
	path = output_dir / label_file_name(label.text)
	path.write_bytes(label.data)
	return dataclasses.replace(label, path=path)


#============================================
def generate_label_images(
	texts: list[str],
	output_dir: pathlib.Path,
	config: ComposerConfig,
	logo: LogoResult,
	verbose: bool = False,
) -> list[LabelImage]:
	"""
	Compose and write one image per label text, in order.

	Args:
		texts: Label texts.
		output_dir: Output directory, created if missing.
		config: Composer configuration.
		logo: Result of the logo load attempt.
		verbose: Print one line per written file and a progress bar.

	Returns:
		Written label images in input order.
	"""
	output_dir.mkdir(parents=True, exist_ok=True)
	images: list[LabelImage] = []
	total = len(texts)
	for index, text in enumerate(texts, start=1):
		label = compose_label_image(text, config, logo)
		written = write_label_image(label, output_dir)
		images.append(written)
		if verbose:
			print(f"Generated: {written.text} -> {written.path}")
			if index % PROGRESS_UPDATE_EVERY == 0 and index < total:
				print_progress("Labels", index, total)
				print()
	if verbose and total > 0:
		print_progress("Labels", total, total)
		print()
	return images
