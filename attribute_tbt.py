#!/usr/bin/env python3
"""
TBT Impact Attribution - Command Line Facade
"""

import json
import sys
from tbt_attribution import AttributionConfig
from tbt_attribution.session import attribute_artifact_file
from tbt_attribution.web import prepare_results


def main():
    import argparse
    parser = argparse.ArgumentParser(
        description='Attribute Total Blocking Time to the main-thread tasks of a page load.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python attribute_tbt.py artifact.json
  python attribute_tbt.py artifact.json --top 20
  python attribute_tbt.py artifact.json --workers 4 --parallel-threshold 500
        """
    )
    parser.add_argument('input_file', help='Path to the artifact JSON file')
    parser.add_argument('-o', '--output', dest='output_file', default='tbt_impact.json', help='Output JSON file')
    parser.add_argument('--top', dest='top_n', type=int, default=10, help='Number of top tasks to report')
    parser.add_argument('--workers', type=int, default=1,
                       help='Worker processes used to evaluate task impacts')
    parser.add_argument('--parallel-threshold', type=int, default=2000,
                       help='Minimum number of tasks before worker processes are used')
    args = parser.parse_args()
    
    try:
        config = AttributionConfig(
            num_workers=args.workers,
            parallel_threshold=args.parallel_threshold
        )
        
        print(f"\nConfiguration:")
        print(f"  Input file: {args.input_file}")
        print(f"  Output file: {args.output_file}")
        print(f"  Workers: {args.workers}")
        print(f"  Parallel threshold: {args.parallel_threshold}\n")
        impact_tasks, window = attribute_artifact_file(args.input_file, config)
        results = prepare_results(impact_tasks, window, top_n=args.top_n)
        
        summary = results['summary']
        print(f"\nWindow: [{summary['window_start_ms']:.2f} ms, {summary['window_end_ms']:.2f} ms]")
        print(f"Total blocking time: {summary['total_blocking_time_formatted']} "
              f"across {summary['blocking_tasks']} of {summary['top_level_tasks']} top-level tasks")
        for entry in results['top_tasks']:
            print(f"  {entry['self_tbt_impact_formatted']:>12}  self  "
                  f"{entry['tbt_impact_formatted']:>12}  total  {entry['name'] or entry['event']}")
        
        with open(args.output_file, 'w', encoding='utf-8') as f:
            json.dump(results, f, indent=2)
        print(f"\n✓ Attribution complete! Results written to {args.output_file}")
    except FileNotFoundError:
        print(f"Error: File '{args.input_file}' not found.")
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
