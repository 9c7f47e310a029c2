"""Simple forecast example against a running FAIM forecast API."""

import requests

API_URL = "http://localhost:8000/api/v1/tools"


def main():
    """Forecast monthly sales, then the same data as two co-observed variables."""
    monthly_sales = [100, 120, 115, 130, 125, 140, 135, 150, 145, 160, 155, 170]

    response = requests.post(
        f"{API_URL}/forecast",
        json={
            "model": "chronos2",
            "x": monthly_sales,
            "horizon": 6,
            "output_type": "quantiles",
            "quantiles": [0.1, 0.5, 0.9],
        },
    )
    result = response.json()

    if result["success"]:
        data = result["data"]
        print(f"Model: {data['model_name']} {data['model_version']}")
        print(f"Input shape:  {data['shape_info']['input_shape']}")
        print(f"Output shape: {data['shape_info']['output_shape']}")
        print(f"Duration: {data['metadata']['duration_ms']:.2f}ms")
    else:
        error = result["error"]
        print(f"Error {response.status_code}: [{error['error_code']}] {error['message']}")
        if error.get("details"):
            print(f"  {error['details']}")

    # Sales and ad spend per month: [sequence, features]
    ad_spend = [10, 12, 11, 13, 12, 14, 13, 15, 14, 16, 15, 17]
    multivariate = [[s, a] for s, a in zip(monthly_sales, ad_spend)]

    response = requests.post(
        f"{API_URL}/forecast/prepare",
        json={"x": multivariate, "horizon": 6, "is_multivariate": True},
    )
    prepared = response.json()
    if prepared["success"]:
        print(f"\nMultivariate input normalized to {prepared['data']['input_shape']}")


if __name__ == "__main__":
    main()
