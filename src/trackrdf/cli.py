import argparse
from pathlib import Path
import logging
from typing import List, Optional

from trackrdf.io.loader import TrajectoryReader
from trackrdf.io.writer import RDFWriter
from trackrdf.core.groups import GroupPartitioner
from trackrdf.core.rdf import RDF
from trackrdf.core.rdf_calculator import RDFCalculator, VALID_NORMALIZATIONS
from trackrdf.visualization.rdf_plotter import RDFPlotter
from trackrdf.utils.config_manager import ConfigManager
from trackrdf.exceptions import TrackRDFError

logger = logging.getLogger(__name__)


def run_analysis(config: ConfigManager, progress: bool = False) -> RDF:
    """Read the trajectory, histogram the last frame and write every configured output."""
    traj_cfg, groups_cfg, rdf_cfg = config.get_trajectory_config(), config.get_groups_config(), config.get_rdf_config()
    out_cfg, plot_cfg = config.get_output_config(), config.get_plotting_config()

    partitioner = GroupPartitioner(groups_cfg['type_a'], groups_cfg['type_b'])
    with TrajectoryReader(traj_cfg['directory'], traj_cfg['filename']) as reader:
        last_frame = reader.read_last_frame(on_error=traj_cfg['on_error'], on_frame=partitioner.count,
                                            progress=progress)
    group_a, group_b = partitioner.partition(last_frame)

    calc = RDFCalculator(bin_width=rdf_cfg['bin_width'], normalization=rdf_cfg['normalization'],
                         out_of_range=rdf_cfg['out_of_range'], n_workers=rdf_cfg['n_workers'],
                         chunk_size=rdf_cfg['chunk_size'], progress=progress)
    rdf = calc.calculate(group_a, group_b, last_frame.box, time_step=last_frame.time_step)

    writer = RDFWriter(out_cfg['directory'])
    writer.save_text(rdf, out_cfg['text_file'])
    if out_cfg['save_npz']:
        writer.save_rdf_data(rdf)
    if out_cfg['save_summary']:
        writer.save_analysis_results(rdf.metadata())
    if out_cfg['save_config']:
        writer.save_config(config.to_dict())

    if plot_cfg['enabled']:
        RDFPlotter(rdf, writer.output_dir / plot_cfg['filename'], title=plot_cfg['title'],
                   theme=plot_cfg['theme'], dpi=plot_cfg['dpi']).generate_plot()
    return rdf


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description='Radial distribution function from a TRACK trajectory.')
    parser.add_argument('--track-dir', type=str, help='Directory containing the TRACK file (default: config or cwd).')
    parser.add_argument('--config', type=str, help='Path to YAML configuration file.')
    parser.add_argument('--output-dir', type=str, help='Directory for results.')
    parser.add_argument('--dr', type=float, help='Override the histogram bin width.')
    parser.add_argument('--type-a', type=int, help='Atom type of the reference group.')
    parser.add_argument('--type-b', type=int, help='Atom type of the partner group.')
    parser.add_argument('--normalization', choices=VALID_NORMALIZATIONS, help='RDF normalization variant.')
    parser.add_argument('--workers', type=int, help='Worker processes for the pair histogram.')
    parser.add_argument('--plot', action='store_true', help='Also write a PNG line plot (overrides config).')
    parser.add_argument('--stop-on-bad-frame', action='store_true',
                        help='Treat a corrupt trailing frame as end of stream instead of failing.')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging.')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    overrides = {'trajectory': {}, 'groups': {}, 'rdf': {}, 'output': {}, 'plotting': {}}
    if args.track_dir is not None: overrides['trajectory']['directory'] = args.track_dir
    if args.stop_on_bad_frame: overrides['trajectory']['on_error'] = 'stop'
    if args.type_a is not None: overrides['groups']['type_a'] = args.type_a
    if args.type_b is not None: overrides['groups']['type_b'] = args.type_b
    if args.dr is not None: overrides['rdf']['bin_width'] = args.dr
    if args.normalization is not None: overrides['rdf']['normalization'] = args.normalization
    if args.workers is not None: overrides['rdf']['n_workers'] = args.workers
    if args.output_dir is not None: overrides['output']['directory'] = args.output_dir
    if args.plot: overrides['plotting']['enabled'] = True

    try:
        config = ConfigManager(args.config)
        config.update_config(overrides)
        rdf = run_analysis(config, progress=True)
        out_path = Path(config.get_output_config()['directory']) / config.get_output_config()['text_file']
        logger.info(f"RDF with {rdf.n_bins} bins ({rdf.n_a} x {rdf.n_b} pairs) written to {out_path}")
    except FileNotFoundError as e: logger.error(f"File Error: {e}"); raise SystemExit(1)
    except TrackRDFError as e: logger.error(f"Trajectory Error: {e}"); raise SystemExit(1)
    except ValueError as e: logger.error(f"Value Error: {e}"); raise SystemExit(1)
    except Exception as e: logger.error(f"Unexpected error: {e}", exc_info=True); raise SystemExit(1)

if __name__ == "__main__":
    main()
