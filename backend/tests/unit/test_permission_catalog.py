from fleet_erp.core.permissions import (
    ALL_PERMISSIONS,
    MODULE_NAMES,
    PERMISSIONS,
    get_permission_by_name,
    get_permissions_by_module,
    module_of,
)


def test_every_permission_is_namespaced_by_its_module():
    for module in PERMISSIONS:
        for permission in module.permissions:
            assert permission.module == module.module
            assert permission.name == f"{module.module}.{permission.action}"
            assert module_of(permission.name) == module.module


def test_names_are_unique():
    names = [permission.name for permission in ALL_PERMISSIONS]
    assert len(names) == len(set(names))
    assert len(MODULE_NAMES) == len(set(MODULE_NAMES))


def test_flat_list_matches_modules():
    assert len(ALL_PERMISSIONS) == sum(len(module.permissions) for module in PERMISSIONS)
    assert "vehicles" in MODULE_NAMES
    assert "accounts-payable" in MODULE_NAMES


def test_lookup_by_name():
    permission = get_permission_by_name("vehicles.update-km")
    assert permission is not None
    assert permission.module == "vehicles"
    assert permission.action == "update-km"
    assert get_permission_by_name("vehicles.fly") is None


def test_lookup_by_module():
    names = {permission.name for permission in get_permissions_by_module("payroll")}
    assert names == {"payroll.view", "payroll.process"}
    assert get_permissions_by_module("unknown") == []


def test_module_of_splits_on_first_dot():
    assert module_of("accounts-payable.view-summary") == "accounts-payable"
    assert module_of("dashboard") == "dashboard"
