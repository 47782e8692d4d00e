import os
import re
import sys
import time
import warnings

_VERBOSE_FLAGS = {"--verbose", "-v"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_env_log_level = os.environ.get("TF_CPP_MIN_LOG_LEVEL")
_suppress_messages = (not _cli_verbose) and _env_log_level != "0"

if _suppress_messages and _env_log_level is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

if _suppress_messages:
    warnings.filterwarnings(
        "ignore",
        message=r"Protobuf gencode version .* is exactly one major version older than the runtime version .*",
        category=UserWarning,
        module="google.protobuf",
    )

VERBOSE = _cli_verbose


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


import tensorflow as tf

if _suppress_messages:
    tf.get_logger().setLevel("ERROR")
    for handler in tf.get_logger().handlers:
        handler.setLevel("ERROR")

from argparse import ArgumentParser, ArgumentTypeError

from mandelbrot import (
    BACKENDS,
    PlaneRectangle,
    RenderParameters,
    parse_complex,
    parse_size,
    render_image,
    to_rgb_bytes,
    write_image,
)

EXAMPLE = "mandel.png 800x600 -1.20,0.35 -1,0.20"


class MandelArgumentParser(ArgumentParser):
    """Argument parser that shows an example invocation and exits with status 1."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Points such as "-1.20,0.35" are positionals, not options.
        self._negative_number_matcher = re.compile(r'^-\.?\d')

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\nExample: {self.prog} {EXAMPLE}\n")


def select_device():
    """Return the TensorFlow device for the tensor backend, preferring the first GPU."""

    gpus = tf.config.list_physical_devices('GPU')
    if not gpus:
        log("No GPU found, using CPU")
        return '/CPU:0'
    try:
        for gpu in gpus:
            tf.config.experimental.set_memory_growth(gpu, True)
    except RuntimeError as e:
        log(e)
        return '/CPU:0'
    log("GPU found, using %s" % gpus[0].name)
    return '/GPU:0'


def _size_arg(text):
    size = parse_size(text)
    if size is None:
        raise ArgumentTypeError(f"failed to parse image size '{text}', expected WIDTHxHEIGHT")
    if size[0] < 1 or size[1] < 1:
        raise ArgumentTypeError(f"image size '{text}' must be at least 1x1")
    return size


def _point_arg(text):
    point = parse_complex(text)
    if point is None:
        raise ArgumentTypeError(f"failed to parse point '{text}', expected RE,IM")
    return point


def build_parser():
    parser = MandelArgumentParser(
        description='Render the Mandelbrot set over a rectangle of the complex plane.',
        epilog=f'Example: %(prog)s {EXAMPLE}',
    )

    parser.add_argument('output', metavar='FILE',
                        help='image file to write; the extension selects the format')

    parser.add_argument('size', type=_size_arg, metavar='WIDTHxHEIGHT',
                        help='image size in pixels, e.g. 800x600')

    parser.add_argument('upper_left', type=_point_arg, metavar='UPPER_LEFT',
                        help='upper-left corner of the plane as RE,IM')

    parser.add_argument('lower_right', type=_point_arg, metavar='LOWER_RIGHT',
                        help='lower-right corner of the plane as RE,IM')

    parser.add_argument('--backend', choices=BACKENDS, default='tensor',
                        help='"tensor" (default) evaluates all pixels at once with TensorFlow; '
                             '"scalar" evaluates pixel by pixel in Python and is much slower for large images.')

    parser.add_argument('--format', type=str, dest='format', metavar='FORMAT', default=None,
                        help='file format for the image. Can be any extension supported by Pillow. '
                             'Default: taken from FILE, else "png".')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow and hardware diagnostics.')

    return parser


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    width, height = opt.size
    try:
        params = RenderParameters(
            width=width,
            height=height,
            plane=PlaneRectangle(upper_left=opt.upper_left, lower_right=opt.lower_right),
        )
    except ValueError as exc:
        parser.error(str(exc))

    device = select_device() if opt.backend == 'tensor' else None
    log("Rendering %dx%d from %s to %s with the %s backend"
        % (width, height, opt.upper_left, opt.lower_right, opt.backend))

    start = time.perf_counter()
    pixels = render_image(params, backend=opt.backend, device=device)
    log("Rendered in %.2f s" % (time.perf_counter() - start))

    try:
        path = write_image(opt.output, to_rgb_bytes(pixels), width, height, image_format=opt.format)
    except (OSError, ValueError) as exc:
        print(f"failed to write {opt.output}: {exc}", file=sys.stderr)
        return 1

    log("Wrote %s" % path)
    return 0


if __name__ == '__main__':
    sys.exit(main())
