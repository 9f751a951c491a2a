"""
Command-line interface for threaded cylinder generation.

Acts as the host for the mesh builder: registers the parameter panel as
flags, loads persisted parameters, triggers one build and writes the
results.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional

from ..calculator.core import calculate_dimensions
from ..calculator.validation import Severity, validate_params
from ..core.builder import ThreadGeometry
from ..core.topology import analyze_mesh
from ..enums import Hand
from ..io.loaders import ThreadParams, load_params_json, save_params_json
from ..io.package import (
    create_package_zip,
    generate_package,
    package_basename,
    save_package_to_dir,
)
from ..io.schema import HOST_PARAMETERS, HostParameter


def host_range_type(param: HostParameter) -> Callable[[str], float]:
    """argparse type that parses a numeric flag and enforces the host range."""
    caster = int if param.kind == "int" else float

    def parse(text: str):
        try:
            value = caster(text)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid {param.kind} value: {text!r}")
        if not param.in_range(value):
            raise argparse.ArgumentTypeError(
                f"{param.label} must be between {param.minimum} and {param.maximum}, got {value}"
            )
        return value

    return parse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="threadmesh",
        description="Generate 3D-printable threaded cylinder meshes (STL, STEP, 3MF)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Default thread (6 turns, r=1.0/1.2, pitch 0.3) into the current directory
  threadmesh

  # M8-ish thread, 20 turns, finer tessellation
  threadmesh --inner-radius 3.4 --outer-radius 4.0 --height-per-turn 1.25 --turns 20 --steps-per-turn 96

  # Load saved parameters, override the turn count
  threadmesh thread.json --turns 10

  # Right-hand thread, open at the top
  threadmesh --hand right --no-lead-out

  # Check topology without writing geometry
  threadmesh --analyze --no-save

  # Save parameters for later reproduction
  threadmesh --turns 12 --save-json thread.json
        """
    )

    parser.add_argument(
        'params_file',
        type=str,
        nargs='?',
        default=None,
        help='Optional JSON parameter file (flags override its values)'
    )

    for param in HOST_PARAMETERS:
        if param.kind not in ("int", "float"):
            continue
        parser.add_argument(
            '--' + param.field.replace('_', '-'),
            dest=param.field,
            type=host_range_type(param),
            default=None,
            help=f'{param.label} (default: {param.default}, range {param.minimum}-{param.maximum})'
        )

    parser.add_argument(
        '--no-lead-in',
        action='store_true',
        help='Leave the bottom open (no lead-in cap)'
    )

    parser.add_argument(
        '--no-lead-out',
        action='store_true',
        help='Leave the top open (no lead-out cap)'
    )

    parser.add_argument(
        '--hand',
        type=str,
        choices=[h.value for h in Hand],
        default=None,
        help='Helix direction (default: left)'
    )

    parser.add_argument(
        '-o', '--output-dir',
        type=str,
        default='.',
        help='Output directory (default: current directory)'
    )

    parser.add_argument(
        '--name',
        type=str,
        default=None,
        help='Base filename for geometry files (default: derived from parameters)'
    )

    parser.add_argument('--no-step', action='store_true', help='Do not write STEP')
    parser.add_argument('--no-stl', action='store_true', help='Do not write STL')
    parser.add_argument('--no-3mf', action='store_true', help='Do not write 3MF')

    parser.add_argument(
        '--zip',
        action='store_true',
        help='Write a single ZIP archive instead of separate files'
    )

    parser.add_argument(
        '--save-json',
        type=str,
        default=None,
        help='Save the resolved parameters to a JSON file'
    )

    parser.add_argument(
        '--analyze',
        action='store_true',
        help='Report mesh topology (watertight, orientation, boundary loops)'
    )

    parser.add_argument(
        '--no-save',
        action='store_true',
        help='Do not write geometry files (use with --analyze or --view)'
    )

    parser.add_argument(
        '--view',
        action='store_true',
        help='View in OCP viewer (requires ocp_vscode extension)'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    return parser


def resolve_params(args: argparse.Namespace) -> ThreadParams:
    """Merge parameters: explicit flag > JSON file > host default."""
    values = {}
    if args.params_file is not None:
        values = load_params_json(args.params_file).model_dump()

    for param in HOST_PARAMETERS:
        if param.kind in ("int", "float"):
            value = getattr(args, param.field)
            if value is not None:
                values[param.field] = value

    if args.no_lead_in:
        values['lead_in'] = False
    if args.no_lead_out:
        values['lead_out'] = False
    if args.hand is not None:
        values['hand'] = args.hand

    return ThreadParams(**values)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.params_file:
            print(f"Loading parameters from {args.params_file}...")
        params = resolve_params(args)
    except Exception as e:
        print(f"Error loading parameters: {e}", file=sys.stderr)
        return 1

    validation = validate_params(params)
    for m in validation.messages:
        stream = sys.stderr if m.severity == Severity.ERROR else sys.stdout
        print(f"  [{m.severity.value}] {m.code}: {m.message}", file=stream)
        if m.suggestion:
            print(f"      {m.suggestion}", file=stream)
    if not validation.valid:
        print("Error: invalid thread parameters", file=sys.stderr)
        return 1

    geometry = ThreadGeometry(params)

    print(f"Building thread mesh ({params.turns} turns, {params.steps_per_turn} steps/turn)...")
    mesh = geometry.build_mesh()
    report = geometry.report
    dims = calculate_dimensions(params)
    print(f"  Vertices: {mesh.vertex_count()}")
    print(f"  Polygons: {report.polygon_count}")
    print(f"  Height:   {dims.total_height:.4f}")
    print(f"  Ends:     {'closed' if report.is_closed else 'open'}")

    analysis = None
    if args.analyze:
        analysis = analyze_mesh(mesh)
        print(f"\nTopology: {analysis.message}")
        print(f"  Edges: {analysis.edge_count} ({analysis.boundary_edge_count} boundary)")
        print(f"  Euler characteristic: {analysis.euler_characteristic}")

    if args.save_json:
        save_params_json(params, args.save_json)
        print(f"\nSaved parameters: {args.save_json}")

    want_geometry = not (args.no_step and args.no_stl and args.no_3mf)
    if not args.no_save:
        part = None
        if want_geometry:
            print("\nSewing mesh into solid...")
            part = geometry.build()

        files = generate_package(
            params,
            part,
            include_step=not args.no_step,
            include_stl=not args.no_stl,
            include_3mf=not args.no_3mf,
            validation=validation,
            analysis=analysis,
            log=print,
        )

        name = args.name or package_basename(params)
        output_dir = Path(args.output_dir)
        if args.zip:
            output_dir.mkdir(parents=True, exist_ok=True)
            zip_path = output_dir / f"{name}.zip"
            zip_path.write_bytes(create_package_zip(files, name))
            print(f"  Saved: {zip_path}")
        else:
            for path in save_package_to_dir(files, output_dir, name):
                print(f"  Saved: {path}")

    if args.view:
        geometry.show()

    return 0


if __name__ == '__main__':
    sys.exit(main())
