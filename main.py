"""
Haar Wavelet Studio
Multi-stage Haar decomposition and recovery for images of any size
"""

import logging
import sys
import warnings

warnings.filterwarnings('ignore', category=RuntimeWarning)

USAGE = """Usage: python main.py <image_path> [--files] [--out DIR] [--ext EXT]
       python main.py --synthetic [KEY | WIDTH HEIGHT] [--files] [--out DIR] [--ext EXT]"""


def parse_options(args):
    """Split trailing --files/--out/--ext flags from positional arguments."""
    options = {'write_files': False}
    positional = []
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == '--files':
            options['write_files'] = True
        elif arg in ('--out', '--ext'):
            if i + 1 >= len(args):
                raise ValueError(f"{arg} needs a value")
            key = 'output_dir' if arg == '--out' else 'file_ext'
            options[key] = args[i + 1]
            i += 1
        else:
            positional.append(arg)
        i += 1
    return positional, options


def format_metric(value, fmt):
    return "n/a" if value is None else format(value, fmt)


def run_cli(args):
    """Transform then recover an image, printing per-stage degradation."""
    from models.sample_volume import SampleVolume
    from models.transform_params import TransformParams
    from engines.session import TransformSession
    from utils.image_io import load_image
    from utils.metrics import compute_degradation, max_abs_error
    from utils.test_images import generate_demo_image, generate_gradient

    if not args or args[0] == '--help':
        print(USAGE)
        sys.exit(0)

    positional, options = parse_options(args)
    if not positional:
        print(USAGE)
        sys.exit(1)

    if positional[0] == '--synthetic':
        extra = positional[1:]
        if len(extra) == 2:
            image = generate_gradient(int(extra[0]), int(extra[1]))
        else:
            key = extra[0] if extra else 'gradient'
            image = generate_demo_image(key)
            if image is None:
                raise ValueError(f"Unknown synthetic image: {key}")
        print("Generated synthetic image")
    else:
        print(f"Loading: {positional[0]}")
        image = load_image(positional[0])

    params = TransformParams(**options)
    volume = SampleVolume.from_image(image)
    session = TransformSession(volume, params)
    schedule = session.schedule

    print(f"Image: {volume.width}x{volume.height}, {volume.bands} band(s)")
    print(f"Stages: {schedule.row_stages} row, {schedule.column_stages} column")

    forward = session.transform()
    original = session.original.to_image()

    print("\n=== Transform ===")
    for result in forward:
        metrics = compute_degradation(original, result.expansion, params.data_range)
        print(f"Stage {result.stage}: PSNR {format_metric(metrics['psnr'], '.2f')} dB, "
              f"SSIM {format_metric(metrics['ssim'], '.4f')}, {result.elapsed_ms:.2f} ms")

    recovered = session.recover()

    print("\n=== Recover ===")
    print(f"Max round-trip error: {max_abs_error(original, recovered.final.image):.3e}")
    print(f"Time: transform {forward.total_time_ms:.2f} ms, recover {recovered.total_time_ms:.2f} ms")

    if params.write_files:
        print(f"\nSaved stage images to: {params.output_dir}")


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    args = sys.argv[1:]
    if args and args[0] == '--cli':
        args = args[1:]
    run_cli(args)


if __name__ == '__main__':
    main()
