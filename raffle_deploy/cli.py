import argparse
import sys

from raffle_deploy.deploy_lottery import deploy_lottery
from raffle_deploy.exceptions import RaffleDeployError


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog='deploy-raffle',
        description='Provision a VRF subscription and deploy the Raffle contract.',
    )
    parser.add_argument('--project', default='.', help='brownie project holding the Raffle contract')
    parser.add_argument('--network', default='development', help='brownie network to connect to')
    parser.add_argument('--contract', default='Raffle', help='contract name to deploy')
    parser.add_argument('--artifacts', default='deployments', help='where deployment records are written')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    # brownie is only needed once we actually talk to a chain
    from brownie import network, project
    from raffle_deploy.helpful_scripts import build_run_context

    raffle_project = project.load(args.project)
    raffle_project.load_config()
    network.connect(args.network)
    try:
        ctx = build_run_context(contract_name=args.contract)
        deploy_lottery(ctx, artifacts_dir=args.artifacts)
    except RaffleDeployError as exc:
        print(f'Deployment failed: {exc}', file=sys.stderr)
        return 1
    finally:
        network.disconnect()
    return 0


if __name__ == '__main__':
    sys.exit(main())
