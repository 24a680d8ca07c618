#!/usr/bin/env python3
"""
FitPlan Engine - CLI Entry Point

Usage:
    python main.py generate --age A --weight W --height H [--sex S] [--activity L] [--goal G]
    python main.py adjust-demo [--weeks W] [--weekly-change KG] [--seed S]
    python main.py simulate [--profiles N] [--weeks W] [--seed S]
"""

import argparse
import json
import logging
import random
from datetime import datetime, timedelta

from plan_engine.engine import FitPlanEngine
from plan_engine.params import EngineParams
from plan_engine.profile import ActivityLevel, Goal, ProgressEntry, Sex, UserProfile
from data.synthetic import generate_user_profiles
from simulation.engine import SimulationEngine
from analysis.reports import format_adjustment_result, format_plan, generate_simulation_report


def build_profile(args) -> UserProfile:
    return UserProfile.create(
        age=args.age,
        weight_kg=args.weight,
        height_cm=args.height,
        sex=args.sex,
        activity_level=args.activity,
        goal=args.goal,
        dietary_restrictions=args.restriction,
        preferences=args.preference,
        name=args.name,
    )


def run_generate(args):
    """Generate a plan and print it."""
    profile = build_profile(args)
    engine = FitPlanEngine(rng=random.Random(args.seed))
    plan = engine.generate_new_plan(profile)

    if args.json:
        print(json.dumps(plan.to_dict(), indent=2))
    else:
        print(format_plan(plan))

    return plan


def run_adjust_demo(args):
    """Generate a plan, log a synthetic history and adjust."""
    start = datetime.now() - timedelta(weeks=args.weeks)
    profile = UserProfile.create(
        age=30, weight_kg=80, height_cm=180,
        sex='male', activity_level='moderate', goal=args.goal,
        name='Demo user',
    )

    current = {'now': start}
    engine = FitPlanEngine(rng=random.Random(args.seed), clock=lambda: current['now'])
    plan = engine.generate_new_plan(profile)
    print(format_plan(plan, now=start))

    history = [
        ProgressEntry(
            date=start + timedelta(weeks=week),
            weight_kg=round(profile.weight_kg + args.weekly_change * week, 1),
            exercise_sessions=plan.training.weekly_frequency if plan.training else 0,
        )
        for week in range(args.weeks + 1)
    ]

    current['now'] = history[-1].date
    result = engine.adjust_automatically(profile, history)
    if result is None:
        print("No plan to adjust.")
        return None

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(format_adjustment_result(result))
        print(format_plan(result.plan, now=current['now']))

    return result


def run_simulation(args):
    """Run the weekly adjustment loop over synthetic users."""
    print(f"Simulating {args.profiles} users over {args.weeks} weeks...")

    users = generate_user_profiles(args.profiles, seed=args.seed)
    params = EngineParams()
    engine = SimulationEngine(params, verbose=args.verbose)

    results = engine.run_batch(users, args.weeks, seed=args.seed)

    print(generate_simulation_report(results, params))
    return results


def main():
    parser = argparse.ArgumentParser(description='FitPlan Engine')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Generate command
    gen_parser = subparsers.add_parser('generate', help='Generate a plan for a profile')
    gen_parser.add_argument('--age', type=int, required=True, help='Age in years')
    gen_parser.add_argument('--weight', type=float, required=True, help='Weight in kg')
    gen_parser.add_argument('--height', type=float, required=True, help='Height in cm')
    gen_parser.add_argument('--sex', choices=[s.value for s in Sex], default='other')
    gen_parser.add_argument('--activity', choices=[a.value for a in ActivityLevel],
                            default='sedentary', help='Activity level')
    gen_parser.add_argument('--goal', choices=[g.value for g in Goal], default='maintain')
    gen_parser.add_argument('--restriction', action='append', default=[],
                            help='Dietary restriction (repeatable)')
    gen_parser.add_argument('--preference', action='append', default=[],
                            help='Preference (repeatable)')
    gen_parser.add_argument('--name', default='', help='Display name')
    gen_parser.add_argument('--seed', type=int, default=None, help='Random seed')
    gen_parser.add_argument('--json', action='store_true', help='Print the plan as JSON')

    # Adjust demo command
    adj_parser = subparsers.add_parser('adjust-demo', help='Adjust a plan from a synthetic history')
    adj_parser.add_argument('--goal', choices=[g.value for g in Goal], default='lose_weight')
    adj_parser.add_argument('--weeks', type=int, default=4, help='Weeks of history')
    adj_parser.add_argument('--weekly-change', type=float, default=-0.8,
                            help='Weight change per week (kg)')
    adj_parser.add_argument('--seed', type=int, default=42, help='Random seed')
    adj_parser.add_argument('--json', action='store_true', help='Print the result as JSON')

    # Simulate command
    sim_parser = subparsers.add_parser('simulate', help='Run adjustment simulation')
    sim_parser.add_argument('--profiles', type=int, default=14, help='Number of users')
    sim_parser.add_argument('--weeks', type=int, default=12, help='Simulation weeks')
    sim_parser.add_argument('--seed', type=int, default=42, help='Random seed')

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    if args.command == 'generate':
        run_generate(args)
    elif args.command == 'adjust-demo':
        run_adjust_demo(args)
    elif args.command == 'simulate':
        run_simulation(args)
    else:
        parser.print_help()


if __name__ == '__main__':
    main()
