"""
Command-line interface for the camera parameter readout.

Usage:
    camera-readout result.yaml [--fov-format degrees] [--orientation-format quaternion]

The input YAML holds the solver result under 'camera' (plus optional
'errors' and 'warnings') and, optionally, the display settings
('display', 'camera_data', 'calibration_mode').
"""

import argparse
import json
import logging
import sys
from dataclasses import replace

from .camera_presets import list_camera_presets
from .config import (
    CameraData,
    FieldOfViewFormat,
    OrientationFormat,
    PrincipalPointFormat,
    ReadoutConfig,
    parse_enum,
)
from .exceptions import CameraReadoutError
from .presentation import PresentedResult, ResultPresenter
from .solver_result import SolverResult


def setup_logging(verbose: bool = False, stream=None) -> None:
    """Configure logging. Logs go to stdout unless another stream is given."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(stream or sys.stdout)]
    )


def apply_overrides(config: ReadoutConfig, args: argparse.Namespace) -> ReadoutConfig:
    """Overlay command-line options on the settings loaded from file."""
    display = config.display
    if args.fov_format:
        display = replace(display, field_of_view_format=parse_enum(FieldOfViewFormat, args.fov_format))
    if args.orientation_format:
        display = replace(display, orientation_format=parse_enum(OrientationFormat, args.orientation_format))
    if args.principal_point_format:
        display = replace(
            display, principal_point_format=parse_enum(PrincipalPointFormat, args.principal_point_format))

    camera_data = config.camera_data
    if args.sensor_size:
        camera_data = CameraData(
            preset_id=None,
            custom_sensor_width=args.sensor_size[0],
            custom_sensor_height=args.sensor_size[1],
        )
    if args.preset:
        camera_data = replace(camera_data, preset_id=args.preset)

    return replace(config, display=display, camera_data=camera_data)


def print_summary(readout: PresentedResult) -> None:
    """Print the readout in the layout of the result panel."""
    print("\n" + "=" * 60)
    print("CAMERA PARAMETERS")
    print("=" * 60)

    for error in readout.errors:
        print(f"Error:   {error}")

    if readout.has_camera:
        width, height = readout.image_size
        print(f"Image:                  {width:g} x {height:g}")

        unit = readout.field_of_view_format.value
        print(f"\nField of view ({unit}):")
        print(f"  Horiz.:               {readout.field_of_view[0]:.6f}")
        print(f"  Vertical:             {readout.field_of_view[1]:.6f}")

        print("\nCamera position:")
        for label, value in zip(('x', 'y', 'z'), readout.camera_position):
            print(f"  {label}:                    {value:.6f}")

        print(f"\nCamera orientation ({readout.orientation.format.value}):")
        for label, value in zip(readout.orientation.labels, readout.orientation.components):
            print(f"  {label + ':':<22}{value:.6f}")

        print(f"\nPrincipal point ({readout.principal_point_format.value}):")
        print(f"  x:                    {readout.principal_point.x:.6f}")
        print(f"  y:                    {readout.principal_point.y:.6f}")

        print("\nFocal length:")
        focal = readout.focal_length
        if focal.available:
            source = focal.preset_id or 'custom sensor'
            print(f"  Value:                {focal.value:.3f} mm")
            print(f"  Sensor:               {focal.sensor_size.width:g} x "
                  f"{focal.sensor_size.height:g} mm ({source})")
        else:
            print("  Not available in this calibration mode")

    for warning in readout.warnings:
        print(f"Warning: {warning}")
    print("=" * 60)


def main(argv=None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description='Show a solved camera in the chosen display formats',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
    # Show with the formats stored in the file
    camera-readout result.yaml

    # Quaternion orientation, absolute principal point
    camera-readout result.yaml --orientation-format quaternion --principal-point-format absolute

    # Focal length for an APS-C body, as JSON
    camera-readout result.yaml --preset aps_c --json
'''
    )

    parser.add_argument(
        'input',
        type=str,
        nargs='?',
        help='Path to YAML file with the solver result and settings'
    )

    parser.add_argument(
        '--fov-format',
        choices=[f.value for f in FieldOfViewFormat],
        help='Field of view unit'
    )

    parser.add_argument(
        '--orientation-format',
        choices=[f.value for f in OrientationFormat],
        help='Orientation representation'
    )

    parser.add_argument(
        '--principal-point-format',
        choices=[f.value for f in PrincipalPointFormat],
        help='Principal point coordinate frame'
    )

    parser.add_argument(
        '--preset',
        type=str,
        default=None,
        help='Camera preset id for the focal length (see --list-presets)'
    )

    parser.add_argument(
        '--sensor-size',
        type=float,
        nargs=2,
        metavar=('WIDTH', 'HEIGHT'),
        help='Custom sensor size in mm'
    )

    parser.add_argument(
        '--list-presets',
        action='store_true',
        help='List camera presets and exit'
    )

    parser.add_argument(
        '--json',
        action='store_true',
        help='Print the readout as JSON'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose output'
    )

    args = parser.parse_args(argv)

    if args.list_presets:
        for preset in list_camera_presets():
            print(f"{preset.id:<22}{preset.description:<34}{preset.sensor_width:g} x {preset.sensor_height:g} mm")
        return 0

    if not args.input:
        parser.error('the following arguments are required: input')

    # Setup logging
    setup_logging(args.verbose, stream=sys.stderr if args.json else None)
    logger = logging.getLogger(__name__)

    try:
        config = apply_overrides(ReadoutConfig.from_yaml(args.input), args)
        solver_result = SolverResult.from_yaml(args.input)

        readout = ResultPresenter(config).present(solver_result)

        if args.json:
            print(json.dumps(readout.as_dict(), indent=2))
        else:
            print_summary(readout)

        if not solver_result.succeeded:
            logger.error("Solver result has no camera parameters")
            return 1
        return 0

    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except CameraReadoutError as e:
        logger.error(f"Invalid input: {e}")
        return 1
    except (KeyError, ValueError) as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
