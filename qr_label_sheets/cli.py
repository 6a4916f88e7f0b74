"""
CLI entry points for QR label sheet generation.
"""

# Standard Library
import argparse
import dataclasses
import pathlib
import time

# local repo modules
import qr_label_sheets as qls
import qr_label_sheets.assemble
import qr_label_sheets.compose
import qr_label_sheets.config
import qr_label_sheets.labels
import qr_label_sheets.layout
import qr_label_sheets.render


AssemblyResult = qls.config.AssemblyResult
ComposerConfig = qls.config.ComposerConfig
LayoutMode = qls.config.LayoutMode
SheetConfig = qls.config.SheetConfig
LayoutError = qls.layout.LayoutError

COMPOSER_PRESETS = qls.config.COMPOSER_PRESETS
SHEET_PRESETS = qls.config.SHEET_PRESETS
DEFAULT_PRESET = qls.config.DEFAULT_PRESET
DEFAULT_OUTPUT_DIR = qls.config.DEFAULT_OUTPUT_DIR
DEFAULT_LOGO_PATH = qls.config.DEFAULT_LOGO_PATH
DOCUMENT_NAME = qls.config.DOCUMENT_NAME


#============================================
def build_sheet_config(args: argparse.Namespace) -> SheetConfig:
	"""
	Build sheet config from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		SheetConfig.
	"""
	preset = SHEET_PRESETS[args.preset]
	mode = preset.mode
	if args.layout_mode is not None:
		mode = LayoutMode(args.layout_mode)
	config = dataclasses.replace(
		preset,
		margins=dataclasses.replace(preset.margins),
		mode=mode,
		draw_outlines=args.draw_outlines,
	)
	return config


#============================================
def build_composer_config(args: argparse.Namespace) -> ComposerConfig:
	"""
	Build composer config from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		ComposerConfig.
	"""
	return dataclasses.replace(COMPOSER_PRESETS[args.preset])


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Argument list, None for sys.argv.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Generate labeled QR codes and a printable PDF sheet.")

	range_group = parser.add_argument_group("Labels")
	range_group.add_argument("-c", "--code", dest="code", default=None, help="Two-letter code prefix (default HP).")
	range_group.add_argument("-s", "--start", dest="start", default=None, help="Starting number (default 1).")
	range_group.add_argument("-e", "--end", dest="end", default=None, help="Ending number (default 20).")
	range_group.add_argument(
		"--no-prompt",
		dest="prompt",
		action="store_false",
		help="Use defaults for values not given on the command line.",
	)

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output-dir", dest="output_dir", default=DEFAULT_OUTPUT_DIR, help="Output directory.")
	output_group.add_argument("-m", "--manifest", dest="manifest_path", default=None, help="Output manifest JSON path.")
	output_group.add_argument("-L", "--logo", dest="logo_path", default=DEFAULT_LOGO_PATH, help="Logo image for the label band.")

	layout_group = parser.add_argument_group("Layout")
	layout_group.add_argument(
		"-p", "--preset",
		dest="preset",
		choices=sorted(SHEET_PRESETS),
		default=DEFAULT_PRESET,
		help="Canvas and grid preset.",
	)
	layout_group.add_argument(
		"--layout-mode",
		dest="layout_mode",
		choices=[mode.value for mode in LayoutMode],
		default=None,
		help="Override the preset packing policy.",
	)
	layout_group.add_argument("-d", "--draw-outlines", dest="draw_outlines", action="store_true", help="Draw tile outlines.")
	layout_group.add_argument("-D", "--no-draw-outlines", dest="draw_outlines", action="store_false", help="Disable tile outlines.")

	parser.set_defaults(
		draw_outlines=False,
		prompt=True,
	)

	args = parser.parse_args(argv)
	return args


#============================================
def prompt_value(message: str, supplied: str | None, allow_prompt: bool) -> str | None:
	"""
	Return a supplied value or ask for one.

	Args:
		message: Prompt text.
		supplied: Value from the command line.
		allow_prompt: Ask interactively when no value was supplied.

	Returns:
		Raw answer, or None when neither supplied nor prompted.
	"""
	if supplied is not None:
		return supplied
	if not allow_prompt:
		return None
	return input(message)


#============================================
def resolve_label_inputs(args: argparse.Namespace) -> tuple[str, int, int]:
	"""
	Collect code and range from flags and prompts.

	Args:
		args: Parsed argparse namespace.

	Returns:
		Tuple of (code, start, end).
	"""
	raw_code = prompt_value("Enter two-letter code (default HP): ", args.code, args.prompt)
	raw_start = prompt_value("Starting number (default 1): ", args.start, args.prompt)
	raw_end = prompt_value("Ending number (default 20): ", args.end, args.prompt)
	return qls.labels.resolve_inputs(raw_code, raw_start, raw_end)


#============================================
def run_pipeline(args: argparse.Namespace) -> AssemblyResult:
	"""
	Run generation, layout, assembly and PDF output.

	Args:
		args: Parsed argparse namespace.

	Returns:
		AssemblyResult.
	"""
	code, start, end = resolve_label_inputs(args)
	output_dir = pathlib.Path(args.output_dir)
	sheet_config = build_sheet_config(args)
	composer_config = build_composer_config(args)

	print("QR label sheet pipeline")
	print(f"Labels: {code}-{start} .. {code}-{end}")
	print(f"Output directory: {output_dir}")
	print(f"Preset: {args.preset}")
	print(f"Packing: {sheet_config.mode.value}")
	print(f"Draw outlines: {sheet_config.draw_outlines}")

	geometry = qls.layout.compute_sheet_geometry(
		sheet_config,
		composer_config.canvas_width,
		composer_config.canvas_height,
	)

	start_time = time.perf_counter()
	texts = qls.labels.build_label_texts(code, start, end)
	logo = qls.compose.load_logo(pathlib.Path(args.logo_path))
	print(f"Generating {len(texts)} labels")
	images = qls.compose.generate_label_images(texts, output_dir, composer_config, logo, verbose=True)
	generate_end = time.perf_counter()
	print(f"Images written: {len(images)}")

	print("Assembling document")
	content = qls.assemble.assemble_document(images, geometry)
	output_path = output_dir / DOCUMENT_NAME
	result = qls.render.render_document_pdf(content, geometry, output_path, sheet_config.draw_outlines)
	assemble_end = time.perf_counter()

	qls.render.print_layout_report(geometry, result)
	if args.manifest_path:
		qls.render.write_manifest(pathlib.Path(args.manifest_path), content, geometry, result)
		print(f"Manifest written: {args.manifest_path}")
	print(
		"Timing: generate={:.2f}s assemble={:.2f}s".format(
			generate_end - start_time,
			assemble_end - generate_end,
		)
	)
	print(f"Document written: {output_path}")
	return result


#============================================
def main(argv: list[str] | None = None) -> None:
	"""
	Main entry point.
	"""
	args = parse_args(argv)
	try:
		run_pipeline(args)
	except LayoutError as error:
		raise SystemExit(f"Layout error: {error}")
