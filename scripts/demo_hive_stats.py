#!/usr/bin/env python3
"""Demo: read HiveMind state from Base (read-only, sends no transactions).

Environment variables:
     HIVEMIND_PRIVATE_KEY  – hex key (any key works; it never signs here)
     HIVEMIND_CHAIN        – base | base_sepolia (default base)
     HIVEMIND_RPC_URL      – optional RPC override

Usage:
    python scripts/demo_hive_stats.py [project_id]
"""

from __future__ import annotations

import asyncio
import logging
import sys

from hivemind import HiveMind


async def main() -> None:
    project_id = int(sys.argv[1]) if len(sys.argv) > 1 else 1
    hive = HiveMind.from_env()

    print(f"Network          = {hive.network.display_name} ({hive.network.chain_id})")
    print(f"RPC              = {hive.rpc_url}")
    print(f"HiveMind         = {hive.hivemind_address}")
    print(f"Agent            = {hive.address}")
    print(f"USDC balance     = {await hive.get_usdc_balance()}")
    print()

    stats = await hive.get_hive_stats()
    print("--- hive ---")
    print(f"  agents:        {stats.agent_count}")
    print(f"  projects:      {stats.project_count}")
    print(f"  pooled USDC:   {stats.total_credits_pooled}")
    print()

    agent = await hive.get_agent()
    print(f"--- agent {hive.address} ---")
    if agent is None:
        print("  not registered")
    else:
        print(f"  node id:       {agent.node_id}")
        print(f"  joined:        {agent.joined_at.isoformat()}")
        print(f"  pooled USDC:   {agent.credits_contributed_usdc}")
    print()

    project = await hive.get_project(project_id)
    print(f"--- project {project.id} ---")
    print(f"  name:          {project.name}")
    print(f"  repo:          {project.repo_url}")
    print(f"  status:        {project.status.name}")
    print(f"  funding USDC:  {project.total_funding_usdc}")
    for contributor in project.contributors:
        c = await hive.get_contribution(project.id, contributor)
        print(f"  {contributor}  {c.percentage}%  claimed={c.claimed}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
