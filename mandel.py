import sys
import time
import warnings
from argparse import ArgumentParser
from dataclasses import replace
from pathlib import Path

_VERBOSE_FLAGS = {"--verbose", "-v"}
VERBOSE = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, file=sys.stderr, **kwargs)


from mandelplot import (
    ComplexNumber,
    ConfigurationError,
    ORIGIN,
    PROFILES,
    PixelSurfaceSink,
    RenderProfile,
    TextLineSink,
    complex_to_pixel,
    compute_metadata,
    format_complex,
    get_profile,
    modulus,
    orbit,
)

DEFAULT_IMAGE_NAME = "mandelbrot"


def build_parser():
    parser = ArgumentParser(description="Render the Mandelbrot set as text or as a CGA-style image.")

    parser.add_argument('--profile', type=str, choices=sorted(PROFILES),
                        dest='profile', help='preset to start from: "text" prints symbols, "graphics" paints pixels',
                        metavar='PROFILE', default='text')

    parser.add_argument('--width', type=int,
                        dest='width', help='number of sample columns (overrides the profile)',
                        metavar='WIDTH')

    parser.add_argument('--height', type=int,
                        dest='height', help='number of sample rows (overrides the profile)',
                        metavar='HEIGHT')

    parser.add_argument('--x-min', type=float,
                        dest='x_min', help='real part of the first column',
                        metavar='X_MIN')

    parser.add_argument('--x-max', type=float,
                        dest='x_max', help='real part the columns run towards',
                        metavar='X_MAX')

    parser.add_argument('--y-min', type=float,
                        dest='y_min', help='imaginary part of the first row',
                        metavar='Y_MIN')

    parser.add_argument('--y-max', type=float,
                        dest='y_max', help='imaginary part the rows run towards (may be below --y-min)',
                        metavar='Y_MAX')

    parser.add_argument('--max-iterations', type=int,
                        dest='max_iterations', help='maximum number of times to apply z^2 + c',
                        metavar='MAX_ITERATIONS')

    parser.add_argument('--threshold', type=float,
                        dest='threshold', help='modulus at which an orbit counts as diverged',
                        metavar='THRESHOLD')

    parser.add_argument('--output', dest='output', type=str,
                        help='Destination file. Text goes to stdout when omitted; images default to mandelbrot.<format>.')

    parser.add_argument('--format', type=str,
                        dest='format', help='file format for image output (graphics profile only). Can be any extension supported by Pillow. Default: "png".',
                        metavar='FORMAT', default=None)

    parser.add_argument('--no-status', dest='status', action='store_false',
                        help='do not draw the timing line onto the image')

    parser.add_argument('--orbit', type=float, nargs=2, dest='orbit', metavar=('RE', 'IM'),
                        help='list the orbit of 0 under z^2 + c for c = RE + IM i instead of rendering')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging of the render settings and timing.')

    return parser


def apply_overrides(profile: RenderProfile, opt) -> RenderProfile:
    region_changes = {
        name: getattr(opt, name)
        for name in ("x_min", "x_max", "y_min", "y_max")
        if getattr(opt, name, None) is not None
    }
    if region_changes:
        profile = replace(profile, region=replace(profile.region, **region_changes))

    dims_changes = {
        name: getattr(opt, name)
        for name in ("width", "height")
        if getattr(opt, name, None) is not None
    }
    if dims_changes:
        profile = replace(profile, dims=replace(profile.dims, **dims_changes))

    if getattr(opt, "max_iterations", None) is not None:
        profile = replace(profile, max_iterations=opt.max_iterations)
    if getattr(opt, "threshold", None) is not None:
        profile = replace(profile, divergence_threshold=opt.threshold)
    return profile


def build_sink(profile: RenderProfile, opt, parser: ArgumentParser):
    format_arg = getattr(opt, "format", None)
    image_format = (format_arg or "png").lower().lstrip(".")
    if not image_format:
        image_format = "png"
    output_arg = getattr(opt, "output", None)

    if profile.sink_kind == "text":
        if format_arg is not None:
            parser.error("--format only applies to image output; the text profile writes plain text.")
        if output_arg:
            return TextLineSink(path=Path(output_arg).expanduser().resolve())
        return TextLineSink(sys.stdout)

    if output_arg:
        output_path = Path(output_arg).expanduser()
        if output_path.exists() and output_path.is_dir():
            parser.error("--output must point to a file, not a directory.")
        expected_suffix = f".{image_format}"
        if output_path.suffix:
            if output_path.suffix.lower() != expected_suffix.lower():
                parser.error(f"--output extension {output_path.suffix} does not match --format {image_format}.")
        else:
            output_path = output_path.with_suffix(expected_suffix)
    else:
        output_path = Path(f"{DEFAULT_IMAGE_NAME}.{image_format}")
    return PixelSurfaceSink(output_path.resolve(), image_format=image_format)


def print_orbit(profile: RenderProfile, real: float, imag: float) -> int:
    c = ComplexNumber(real, imag)
    steps = 0
    last = ORIGIN
    for steps, z in enumerate(orbit(c, profile.max_iterations, profile.divergence_threshold), start=1):
        print(format_complex(z))
        last = z
    if modulus(last) >= profile.divergence_threshold:
        print(f"diverged at iteration {steps}")
    else:
        print(f"bounded after {steps} iterations")
    return steps


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    try:
        profile = apply_overrides(get_profile(opt.profile), opt)
        profile.validate()
    except ConfigurationError as exc:
        parser.error(str(exc))

    if profile.divergence_threshold <= 2.0:
        warnings.warn(
            "A divergence threshold of 2 or less lets slowly escaping points look bounded.",
            UserWarning,
            stacklevel=2,
        )

    if opt.orbit is not None:
        print_orbit(profile, opt.orbit[0], opt.orbit[1])
        return 0

    region = profile.region
    log("Profile: %s (%dx%d)" % (profile.name, profile.dims.width, profile.dims.height))
    log("Region: x [%g, %g], y [%g, %g]" % (region.x_min, region.x_max, region.y_min, region.y_max))
    log("Max iterations: %d, threshold: %g" % (profile.max_iterations, profile.divergence_threshold))
    origin_pixel = complex_to_pixel(compute_metadata(profile.dims, profile.region), ORIGIN)
    if origin_pixel is not None:
        log("Origin sampled at row %d, column %d" % origin_pixel)

    sink = build_sink(profile, opt, parser)
    with sink:
        start = time.perf_counter()
        summary = profile.render(sink)
        elapsed = time.perf_counter() - start
        status = "took: %.2f seconds" % elapsed
        if isinstance(sink, PixelSurfaceSink) and opt.status:
            sink.annotate([status])

    log(status)
    log("Bounded: %d, diverged: %d of %d samples" % (summary.bounded, summary.diverged, summary.pixels))
    if isinstance(sink, PixelSurfaceSink):
        log("Image written to %s" % sink.path)
    return 0


if __name__ == '__main__':
    sys.exit(main())
