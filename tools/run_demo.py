"""
Script for a minimal dialogue action selection scenario; the system must decide
how to respond to a user whose intention is only indirectly observed through a
noisy utterance. Prints the posterior over the user intention and the expected
utilities of the system actions given the configured evidence.
"""
import os
import sys
sys.path.insert(
    0,
    os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
)
import logging

import hydra
from omegaconf import OmegaConf

from decnet import (
    Assignment, ProbabilityTable, ConditionalTable, UtilityTable,
    BNode, NodeKind, BNetwork, VariableElimination
)

logger = logging.getLogger(__name__)


TAB = "\t"

def build_network():
    """ User intention i_u, user utterance u_u, system action a_m, reward R """
    i_u = BNode("i_u", distrib=ProbabilityTable.from_values(
        "i_u", { "want_coffee": 0.6, "want_tea": 0.4 }
    ))

    # Speech recognition confuses the two requests every now and then
    u_u_rows = {
        "want_coffee": { "ask_coffee": 0.7, "ask_tea": 0.1, "unclear": 0.2 },
        "want_tea": { "ask_coffee": 0.15, "ask_tea": 0.65, "unclear": 0.2 }
    }
    u_u = BNode("u_u", parents=["i_u"], distrib=ConditionalTable({
        Assignment(i_u=intent): {
            Assignment(u_u=utt): prob for utt, prob in utt_probs.items()
        }
        for intent, utt_probs in u_u_rows.items()
    }))

    actions = ["serve_coffee", "serve_tea", "ask_repeat"]
    a_m = BNode("a_m", kind=NodeKind.ACTION, distrib=ProbabilityTable.from_values(
        "a_m", { a: 1 / len(actions) for a in actions }
    ))

    rewards = {
        ("want_coffee", "serve_coffee"): 2.0, ("want_coffee", "serve_tea"): -3.0,
        ("want_tea", "serve_coffee"): -3.0, ("want_tea", "serve_tea"): 2.0,
        ("want_coffee", "ask_repeat"): -0.5, ("want_tea", "ask_repeat"): -0.5
    }
    r = BNode("R", kind=NodeKind.UTILITY, parents=["i_u", "a_m"], distrib=UtilityTable({
        Assignment(i_u=intent, a_m=action): reward
        for (intent, action), reward in rewards.items()
    }))

    return BNetwork([i_u, u_u, a_m, r])


@hydra.main(config_path="../decnet/configs", config_name="config")
def main(cfg):
    print(OmegaConf.to_yaml(cfg))
    logging.basicConfig(level=cfg.logging.level)

    network = build_network()
    engine = VariableElimination(cfg)

    evidence = Assignment(OmegaConf.to_container(cfg.demo.evidence))
    query_vars = list(cfg.demo.query_vars)

    intent_posterior = engine.query_prob(network, ["i_u"], evidence)
    logger.info(f"Posterior over user intention given {evidence}:")
    for a, prob in intent_posterior.get_rows().items():
        logger.info(f"{TAB}{a}: {prob:.3f}")

    utilities = engine.query_util(network, query_vars, evidence)
    logger.info(f"Expected utilities of {query_vars}:")
    for a, util in utilities.get_rows().items():
        logger.info(f"{TAB}{a}: {util:.3f}")

    best, best_util = utilities.get_best()
    logger.info(f"Selected: {best} (expected utility {best_util:.3f})")


if __name__ == "__main__":
    main()
