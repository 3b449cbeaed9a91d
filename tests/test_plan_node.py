from shardql.condition import Condition, DataType, Operator
from shardql.plan_node import NodeType, PlanNode


def build_tree():
    root = PlanNode.project(["name"])
    root.estimated_rows = 10
    filt = PlanNode.filter([Condition("age", Operator.GREATER_THAN, "25", DataType.INTEGER)])
    filt.estimated_rows = 20
    scan = PlanNode.scan("users", ["name", "age"])
    scan.estimated_rows = 30
    filt.add_child(scan)
    root.add_child(filt)
    return root, filt, scan


def test_scan_node():
    node = PlanNode.scan("users", ["name"])
    assert node.node_id == "scan_users"
    assert node.node_type is NodeType.SCAN
    assert node.table_name == "users"
    assert node.columns == ["name"]
    assert node.is_leaf()


def test_generated_ids_have_prefix_and_short_suffix():
    filt = PlanNode.filter([])
    proj = PlanNode.project(["a"])
    join = PlanNode.join("users", "orders")
    assert filt.node_id.startswith("filter_") and len(filt.node_id) == len("filter_") + 8
    assert proj.node_id.startswith("project_") and len(proj.node_id) == len("project_") + 8
    assert join.node_id.startswith("join_") and len(join.node_id) == len("join_") + 8
    assert join.table_name == "users_orders"
    assert join.node_type is NodeType.JOIN
    assert PlanNode.filter([]).node_id != filt.node_id


def test_estimated_cost_sums_subtree():
    root, filt, scan = build_tree()
    assert scan.estimated_cost() == scan.estimated_rows
    assert filt.estimated_cost() == filt.estimated_rows + scan.estimated_rows
    assert root.estimated_cost() == root.estimated_rows + filt.estimated_cost()


def test_is_leaf():
    root, filt, scan = build_tree()
    assert scan.is_leaf()
    assert not filt.is_leaf()
    assert not root.is_leaf()


def test_clone_with_new_id_renames_every_node():
    root, filt, scan = build_tree()
    root.worker_id = "worker1"
    clone = root.clone_with_new_id()
    assert clone.node_id.startswith(root.node_id + "_")
    assert clone.children[0].node_id.startswith(filt.node_id + "_")
    assert clone.children[0].children[0].node_id.startswith(scan.node_id + "_")
    assert clone.estimated_cost() == root.estimated_cost()
    assert clone.worker_id == "worker1"
    assert clone.children[0].conditions == filt.conditions


def test_clone_is_independent():
    root, _, scan = build_tree()
    clone = root.clone_with_new_id()
    clone.children[0].children[0].columns.append("email")
    clone.metadata["k"] = "v"
    clone.add_child(PlanNode.scan("orders"))
    assert scan.columns == ["name", "age"]
    assert root.metadata == {}
    assert len(root.children) == 1