"""Localized user-visible strings.

Spanish is the dashboard's native language; English is provided for
operators who configure ``language="en"``.
"""

from __future__ import annotations

from typing import Any

_ES: dict[str, str] = {
    # Navigation and page titles
    "nav.dashboard": "Dashboard",
    "nav.fleet": "Flota",
    "nav.routes": "Rutas",
    "nav.orders": "Pedidos",
    "nav.clients": "Clientes",
    "nav.inventory": "Inventario",
    "nav.drivers": "Conductores",
    "nav.maintenance": "Mantenimiento",
    "nav.fuel": "Combustible",
    "nav.suppliers": "Proveedores",
    "nav.finances": "Finanzas",
    "nav.reports": "Reportes",
    "page.not_found": "Página no encontrada",
    "page.not_found_body": "La página que buscas no existe",
    # Widget titles
    "title.metrics": "Métricas",
    "title.fleet_map": "Mapa de Flota",
    "title.priority_alerts": "Alertas Prioritarias",
    "title.critical_deliveries": "Entregas Críticas",
    "title.fleet_performance": "Rendimiento de Flota",
    "title.featured_vehicles": "Vehículos Destacados",
    "title.pending_orders": "Pedidos Pendientes",
    "title.low_stock": "Stock Bajo",
    "title.expiring_licenses": "Licencias por Expirar",
    "title.fuel_summary": "Resumen de Combustible",
    "title.finance_summary": "Resumen Financiero",
    "title.approvals": "Aprobaciones",
    "title.report_summary": "Indicadores Clave",
    # Empty states
    "empty.generic": "Sin datos",
    "empty.filtered": "No se encontraron resultados con los filtros aplicados",
    "empty.featured_vehicles": "No hay vehículos destacados",
    "empty.priority_alerts": "No hay alertas prioritarias",
    "empty.critical_deliveries": "No hay entregas críticas",
    "empty.fleet_map": "No hay vehículos con ubicación",
    "empty.vehicles": "No hay vehículos",
    "empty.routes": "No hay rutas",
    "empty.orders": "No hay pedidos",
    "empty.pending_orders": "No hay pedidos pendientes",
    "empty.clients": "No hay clientes",
    "empty.inventory": "No hay items en inventario",
    "empty.low_stock": "No hay items con stock bajo",
    "empty.drivers": "No hay conductores",
    "empty.expiring_licenses": "No hay licencias por expirar",
    "empty.maintenance": "No hay mantenimientos programados",
    "empty.fuel": "No hay registros de combustible",
    "empty.suppliers": "No hay proveedores",
    "empty.expenses": "No hay gastos registrados",
    "empty.approvals": "No hay aprobaciones",
    # Metric tiles
    "metric.active_vehicles": "Vehículos Activos",
    "metric.daily_deliveries": "Entregas Hoy",
    "metric.pending_orders": "Pedidos Pendientes",
    "metric.compliance": "% Cumplimiento",
    "metric.vs_yesterday": "vs ayer",
    # Relative time
    "time.just_now": "Hace un momento",
    "time.minutes_ago": "Hace {minutes} min",
    "time.hours_ago": "Hace {hours} h",
    "time.remaining_minutes": "{minutes}min",
    "time.remaining_hours": "{hours}h {minutes}min",
    # Orders
    "products.none": "Sin productos",
    "products.more": "{first} +{rest} más",
    # Stock levels
    "stock.critical": "Crítico",
    "stock.low": "Bajo",
    "stock.normal": "Normal",
    # License status
    "license.expired": "Expirada",
    "license.expiring": "Por expirar",
    "license.valid": "Vigente",
    # Report indicators
    "kpi.total_vehicles": "Total de Vehículos",
    "kpi.active_vehicles": "Vehículos en Ruta",
    "kpi.total_orders": "Total de Pedidos",
    "kpi.completed_orders": "Pedidos Entregados",
    # Reports
    "report.fleet": "Reporte de Flota",
    "report.performance": "Reporte de Rendimiento",
    "report.delivery": "Reporte de Entregas",
    "report.financial": "Reporte Financiero",
    "report.generic": "Reporte",
    "report.generated_on": "{name} - Generado el {date}",
    # Resource labels
    "resource.vehicles": "Vehículo",
    "resource.clients": "Cliente",
    "resource.orders": "Pedido",
    "resource.routes": "Ruta",
    "resource.alerts": "Alerta",
    "resource.deliveries": "Entrega",
    "resource.inventory": "Item de inventario",
    "resource.drivers": "Conductor",
    "resource.maintenance": "Mantenimiento",
    "resource.fuel": "Registro de combustible",
    "resource.suppliers": "Proveedor",
    "resource.expenses": "Gasto",
    "resource.approvals": "Aprobación",
    # Toasts
    "toast.error": "Error",
    "toast.created": "{label} creado",
    "toast.created_body": "El registro ha sido creado exitosamente",
    "toast.updated": "{label} actualizado",
    "toast.updated_body": "Los cambios han sido guardados",
    "toast.deleted": "{label} eliminado",
    "toast.deleted_body": "El registro ha sido eliminado",
    "toast.create_failed": "No se pudo crear: {label}",
    "toast.update_failed": "No se pudo actualizar: {label}",
    "toast.delete_failed": "No se pudo eliminar: {label}",
    "toast.fetch_failed": "No se pudieron cargar los datos ({key})",
}

_EN: dict[str, str] = {
    "nav.dashboard": "Dashboard",
    "nav.fleet": "Fleet",
    "nav.routes": "Routes",
    "nav.orders": "Orders",
    "nav.clients": "Clients",
    "nav.inventory": "Inventory",
    "nav.drivers": "Drivers",
    "nav.maintenance": "Maintenance",
    "nav.fuel": "Fuel",
    "nav.suppliers": "Suppliers",
    "nav.finances": "Finances",
    "nav.reports": "Reports",
    "page.not_found": "Page not found",
    "page.not_found_body": "The page you are looking for does not exist",
    "title.metrics": "Metrics",
    "title.fleet_map": "Fleet Map",
    "title.priority_alerts": "Priority Alerts",
    "title.critical_deliveries": "Critical Deliveries",
    "title.fleet_performance": "Fleet Performance",
    "title.featured_vehicles": "Featured Vehicles",
    "title.pending_orders": "Pending Orders",
    "title.low_stock": "Low Stock",
    "title.expiring_licenses": "Expiring Licenses",
    "title.fuel_summary": "Fuel Summary",
    "title.finance_summary": "Finance Summary",
    "title.approvals": "Approvals",
    "title.report_summary": "Key Indicators",
    "empty.generic": "No data",
    "empty.filtered": "No results match the applied filters",
    "empty.featured_vehicles": "No featured vehicles",
    "empty.priority_alerts": "No priority alerts",
    "empty.critical_deliveries": "No critical deliveries",
    "empty.fleet_map": "No vehicles with a known location",
    "empty.vehicles": "No vehicles",
    "empty.routes": "No routes",
    "empty.orders": "No orders",
    "empty.pending_orders": "No pending orders",
    "empty.clients": "No clients",
    "empty.inventory": "No inventory items",
    "empty.low_stock": "No low-stock items",
    "empty.drivers": "No drivers",
    "empty.expiring_licenses": "No expiring licenses",
    "empty.maintenance": "No scheduled maintenance",
    "empty.fuel": "No fuel records",
    "empty.suppliers": "No suppliers",
    "empty.expenses": "No recorded expenses",
    "empty.approvals": "No approvals",
    "metric.active_vehicles": "Active Vehicles",
    "metric.daily_deliveries": "Deliveries Today",
    "metric.pending_orders": "Pending Orders",
    "metric.compliance": "% Compliance",
    "metric.vs_yesterday": "vs yesterday",
    "time.just_now": "Just now",
    "time.minutes_ago": "{minutes} min ago",
    "time.hours_ago": "{hours} h ago",
    "time.remaining_minutes": "{minutes}min",
    "time.remaining_hours": "{hours}h {minutes}min",
    "products.none": "No products",
    "products.more": "{first} +{rest} more",
    "stock.critical": "Critical",
    "stock.low": "Low",
    "stock.normal": "Normal",
    "license.expired": "Expired",
    "license.expiring": "Expiring",
    "license.valid": "Valid",
    "kpi.total_vehicles": "Total Vehicles",
    "kpi.active_vehicles": "Vehicles on Route",
    "kpi.total_orders": "Total Orders",
    "kpi.completed_orders": "Delivered Orders",
    "report.fleet": "Fleet Report",
    "report.performance": "Performance Report",
    "report.delivery": "Delivery Report",
    "report.financial": "Financial Report",
    "report.generic": "Report",
    "report.generated_on": "{name} - Generated on {date}",
    "resource.vehicles": "Vehicle",
    "resource.clients": "Client",
    "resource.orders": "Order",
    "resource.routes": "Route",
    "resource.alerts": "Alert",
    "resource.deliveries": "Delivery",
    "resource.inventory": "Inventory item",
    "resource.drivers": "Driver",
    "resource.maintenance": "Maintenance",
    "resource.fuel": "Fuel record",
    "resource.suppliers": "Supplier",
    "resource.expenses": "Expense",
    "resource.approvals": "Approval",
    "toast.error": "Error",
    "toast.created": "{label} created",
    "toast.created_body": "The record was created successfully",
    "toast.updated": "{label} updated",
    "toast.updated_body": "Your changes were saved",
    "toast.deleted": "{label} deleted",
    "toast.deleted_body": "The record was deleted",
    "toast.create_failed": "Could not create: {label}",
    "toast.update_failed": "Could not update: {label}",
    "toast.delete_failed": "Could not delete: {label}",
    "toast.fetch_failed": "Could not load data ({key})",
}

CATALOGS: dict[str, dict[str, str]] = {"es": _ES, "en": _EN}


def message(key: str, language: str = "es", /, **params: Any) -> str:
    """Look up *key* in the catalog for *language* and format it with *params*.

    Falls back to Spanish, then to the key itself.
    """
    catalog = CATALOGS.get(language, _ES)
    template = catalog.get(key) or _ES.get(key) or key
    if params:
        return template.format(**params)
    return template
