"""
Implements query classes, describing what is asked of an inference call: target
network, query variables and evidence
"""
from ..bn import Assignment
from ..exceptions import MalformedQueryError, UnknownVariableError


class Query:
    """
    Immutable description of an inference query. Query variables and evidence are
    validated against the network upon construction.
    """
    def __init__(self, network, query_vars, evidence=None):
        if isinstance(query_vars, str):
            # Accept single variable
            query_vars = [query_vars]

        self._network = network
        self._query_vars = frozenset(query_vars)
        self._evidence = Assignment() if evidence is None else Assignment(evidence)

        self._validate()

    def __repr__(self):
        return f"{type(self).__name__}({sorted(self._query_vars)}|{self._evidence})"

    @property
    def network(self):
        return self._network

    @property
    def query_vars(self):
        return self._query_vars

    @property
    def evidence(self):
        return self._evidence

    def _validate(self):
        for var in self._query_vars:
            if not self._network.has_node(var):
                raise UnknownVariableError(f"Unknown query variable {var}")
            if self._network.get_node(var).is_utility:
                raise MalformedQueryError(f"Cannot query utility node {var}")

        for var, val in self._evidence.items():
            if not self._network.has_node(var):
                raise UnknownVariableError(f"Unknown evidence variable {var}")

            node = self._network.get_node(var)
            if node.is_utility:
                raise MalformedQueryError(f"Cannot observe utility node {var}")
            if val not in node.values:
                raise MalformedQueryError(
                    f"Evidence value {val!r} outside the domain of {var}"
                )

    def _is_always_relevant(self, node):
        """ Nodes that may not be pruned regardless of the network structure """
        return node.id in self._query_vars or node.id in self._evidence

    def get_irrelevant_node_ids(self):
        """
        Iteratively collect 'barren' nodes, which can be pruned without affecting the
        query result: nodes whose children are all irrelevant, and which are neither
        queried nor observed
        """
        irrelevant = set()

        continue_loop = True
        while continue_loop:
            continue_loop = False
            for node in self._network.get_nodes():
                if node.id in irrelevant: continue
                if self._is_always_relevant(node): continue

                if self._network.get_children_ids(node.id) <= irrelevant:
                    irrelevant.add(node.id)
                    continue_loop = True

        return irrelevant

    def get_filtered_sorted_nodes(self):
        """ Relevant nodes in dependency order (each node before its parents) """
        irrelevant = self.get_irrelevant_node_ids()
        return self._network.get_sorted_nodes(self._network.node_ids - irrelevant)


class ProbQuery(Query):
    """ Query for the posterior distribution of the query variables """
    pass


class UtilQuery(Query):
    """
    Query for the expected utility of each assignment of the query variables (usually
    action variables); utility nodes are always relevant
    """
    def _is_always_relevant(self, node):
        return node.is_utility or super()._is_always_relevant(node)


class ReductionQuery(Query):
    """
    Query for reducing the network to the query variables. Tracks the retained
    variables whose distributions are still to be computed.
    """
    def __init__(self, network, query_vars, evidence=None):
        super().__init__(network, query_vars, evidence)
        self.unresolved = set(self._query_vars)

    def remove_query_var(self, var):
        """ Mark retained variable as resolved """
        self.unresolved.discard(var)
