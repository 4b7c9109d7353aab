#!/usr/bin/env python3
"""
Command line front end for polysym.

Usage:
    python -m polysym group EDGES
    python -m polysym generate EDGES --facet X,Y,Z [--facet ...] [options]
    python -m polysym generate --config FILE [options]

Examples:
    # Order of the icosahedral group
    python -m polysym group 5,3

    # A cube, written as binary STL
    python -m polysym generate 4,3 --facet 1,0,0 --stl cube.stl

    # A tesseract, seen in perspective along w
    python -m polysym generate 4,3,3 --facet 1,0,0,0 --stl tesseract.stl --w-offset 3

    # An octahedron, its facet given as dot products with the mirrors
    python -m polysym generate 4,3 --facet 1,0,0 --mirror-basis
"""

import argparse
import logging
import sys
from typing import List, Optional

from polysym.config import ShapeConfig
from polysym.coxeter import CoxeterDiagram, parse_diagram
from polysym.errors import ConfigurationError
from polysym.group import DEFAULT_MAX_ORDER
from polysym.logging_config import setup_logging
from polysym.mesh import DEFAULT_W_OFFSET


def parse_facet(text: str) -> List[float]:
    """Parse a facet string like '1,0,0' into a list of floats."""
    try:
        return [float(part) for part in text.split(',')]
    except ValueError:
        raise ConfigurationError(f'bad facet {text!r} (expected X,Y,Z,...)',
                                 field='base_facets') from None


def cmd_group(args):
    """Print the order of the group of a Coxeter diagram."""
    diagram = CoxeterDiagram(parse_diagram(args.edges))
    symmetry = diagram.group(max_order=args.max_order)
    print(f"[{','.join(str(e) for e in diagram.edges)}]: order {symmetry.order} "
          f"in {diagram.ndim} dimensions")
    return 0


def _build_config(args) -> ShapeConfig:
    if args.config:
        data = ShapeConfig.load(args.config).to_dict()
    else:
        data = {}
    if args.edges:
        data['edges'] = parse_diagram(args.edges)
    if args.facet:
        data['base_facets'] = [parse_facet(f) for f in args.facet]
    if args.mirror_basis:
        data['mirror_basis'] = True
    if args.name:
        data['name'] = args.name
    if args.max_order is not None:
        data['max_group_order'] = args.max_order
    return ShapeConfig.from_dict(data)


def cmd_generate(args):
    """Build a shape and export it."""
    from polysym.io.shape_json import write_json
    from polysym.io.stl import write_stl
    from polysym.shape import generate

    config = _build_config(args)
    geometry = generate(config)

    counts = geometry.counts()
    print(f"{config.name}: {geometry.ndim} dimensions, {len(geometry.poles)} facets")
    for rank, count in enumerate(counts):
        print(f"  rank {rank}: {count}")
    print(f"  polygons: {len(geometry.polygons)}")

    if args.stl:
        count = write_stl(geometry, args.stl, binary=not args.ascii,
                          name=config.name, w_offset=args.w_offset)
        print(f"Wrote {count} triangles to {args.stl}")
    if args.json:
        write_json(geometry, args.json)
        print(f"Wrote {args.json}")
    return 0


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        prog='python -m polysym',
        description='Symmetric polytopes from Coxeter diagrams',
    )
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='More logging (repeat for debug output)')
    parser.add_argument('--log-file', metavar='FILE', help='Also write logs to FILE')

    subparsers = parser.add_subparsers(dest='action', required=True)

    # group command
    group_parser = subparsers.add_parser('group', help='Print the order of a Coxeter group')
    group_parser.add_argument('edges', help='Comma separated edge labels, e.g. 4,3,3')
    group_parser.add_argument('--max-order', type=int, default=None,
                              help='Give up past this many elements')

    # generate command
    gen_parser = subparsers.add_parser('generate', help='Build a polytope')
    gen_parser.add_argument('edges', nargs='?',
                            help='Comma separated edge labels (or use --config)')
    gen_parser.add_argument('-f', '--facet', action='append', metavar='X,Y,Z',
                            help='Seed facet normal (can be repeated)')
    gen_parser.add_argument('--mirror-basis', action='store_true',
                            help='Facets are given as dot products with each mirror')
    gen_parser.add_argument('-c', '--config', metavar='FILE',
                            help='YAML or JSON shape configuration')
    gen_parser.add_argument('--name', help='Shape name')
    gen_parser.add_argument('--max-order', type=int, default=None,
                            help='Give up past this many group elements')
    gen_parser.add_argument('--stl', metavar='FILE', help='Write STL output')
    gen_parser.add_argument('--ascii', action='store_true', help='Write ASCII instead of binary STL')
    gen_parser.add_argument('--json', metavar='FILE', help='Write shape JSON output')
    gen_parser.add_argument('--w-offset', type=float, default=DEFAULT_W_OFFSET,
                            help='Projection offset along w for 4D shapes')

    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    setup_logging(level, args.log_file)

    try:
        if args.action == 'group':
            if args.max_order is None:
                args.max_order = DEFAULT_MAX_ORDER
            return cmd_group(args)
        elif args.action == 'generate':
            return cmd_generate(args)
        else:
            parser.print_help()
            return 1
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
